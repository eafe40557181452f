"""로봇 이동 명령 엔티티."""

from dataclasses import dataclass

from robot_drawer.domain.enums import CommandType


@dataclass(frozen=True)
class RobotCommand:
    """차동 구동 로봇의 단일 동작 명령.

    Args:
        type: 명령 유형.
        value: 이동 거리 (cm) 또는 회전 각도 (deg). 음수가 아니다.
    """

    type: CommandType
    value: float

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError(
                f'{self.type} value must be non-negative: {self.value}'
            )

    @classmethod
    def forward(cls, distance: float) -> 'RobotCommand':
        return cls(CommandType.MOVE_FORWARD, distance)

    @classmethod
    def backward(cls, distance: float) -> 'RobotCommand':
        return cls(CommandType.MOVE_BACKWARD, distance)

    @classmethod
    def left(cls, degrees: float) -> 'RobotCommand':
        return cls(CommandType.TURN_LEFT, degrees)

    @classmethod
    def right(cls, degrees: float) -> 'RobotCommand':
        return cls(CommandType.TURN_RIGHT, degrees)


# 스트로크 하나에 대응하는 명령 목록
CommandList = list[RobotCommand]
