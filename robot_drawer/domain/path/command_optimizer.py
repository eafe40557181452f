"""연속된 동일 명령 병합."""

from collections.abc import Sequence

from robot_drawer.domain.entities.command import CommandList, RobotCommand
from robot_drawer.domain.path.rounding import round_tenths


def optimize_commands(commands: Sequence[RobotCommand]) -> CommandList:
    """인접한 같은 유형의 명령을 값의 합으로 병합한다.

    순서는 바꾸지 않으며, 다른 유형을 사이에 둔 명령끼리는 병합하지 않는다.
    입력 명령은 변경하지 않는다.

    Args:
        commands: 명령 목록.

    Returns:
        병합된 명령 목록.
    """
    if not commands:
        return []

    optimized: CommandList = []
    current_type = commands[0].type
    total = commands[0].value

    for command in commands[1:]:
        if command.type == current_type:
            total += command.value
            continue
        optimized.append(_merged(current_type, total))
        current_type = command.type
        total = command.value

    optimized.append(_merged(current_type, total))
    return optimized


def _merged(command_type, total: float) -> RobotCommand:
    """합산 결과로 명령을 만든다. 이동 거리는 float 누적 오차를 정리한다."""
    if command_type.is_turn:
        return RobotCommand(command_type, total)
    return RobotCommand(command_type, round_tenths(total))
