"""로봇 명령 JSON 직렬화/역직렬화.

도메인 명령 ↔ 로봇 펌웨어 와이어 포맷 변환을 담당한다.
와이어 포맷은 스트로크별 배열의 배열이다::

    [[{"type": "turn_right", "value": 90}, {"type": "move_forward", "value": 10.0}], ...]
"""

from __future__ import annotations

from collections.abc import Sequence
import json
from typing import Any

from robot_drawer.domain.entities.command import CommandList, RobotCommand
from robot_drawer.domain.enums import CommandType
from robot_drawer.domain.exceptions import PayloadFormatError

# JSON.stringify와 같은 공백 없는 표기
_SEPARATORS = (',', ':')


# -- 직렬화 (도메인 → JSON) --

def command_to_dict(command: RobotCommand) -> dict[str, Any]:
    """명령 하나를 와이어 dict로 변환한다."""
    value = command.value
    if isinstance(value, float) and value.is_integer() and command.type.is_turn:
        value = int(value)
    return {'type': command.type.value, 'value': value}


def serialize_command_lists(command_lists: Sequence[CommandList]) -> str:
    """스트로크별 명령 목록을 와이어 JSON 문자열로 직렬화한다."""
    data = [
        [command_to_dict(c) for c in commands]
        for commands in command_lists
    ]
    return json.dumps(data, separators=_SEPARATORS)


# -- 역직렬화 (JSON → 도메인) --

def _dict_to_command(data: Any) -> RobotCommand:
    """와이어 dict를 명령으로 변환한다."""
    if not isinstance(data, dict):
        raise PayloadFormatError(f'command must be an object: {data!r}')
    try:
        command_type = CommandType(data['type'])
    except (KeyError, ValueError) as exc:
        raise PayloadFormatError(
            f'unknown command type: {data.get("type")!r}'
        ) from exc

    value = data.get('value')
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadFormatError(f'command value must be a number: {value!r}')
    try:
        return RobotCommand(command_type, value)
    except ValueError as exc:
        raise PayloadFormatError(str(exc)) from exc


def deserialize_command_lists(payload: str) -> list[CommandList]:
    """와이어 JSON 문자열을 스트로크별 명령 목록으로 역직렬화한다.

    Raises:
        PayloadFormatError: 형식이 맞지 않을 때.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise PayloadFormatError(f'invalid JSON payload: {exc}') from exc

    if not isinstance(data, list):
        raise PayloadFormatError('payload must be an array of strokes')

    result: list[CommandList] = []
    for stroke in data:
        if not isinstance(stroke, list):
            raise PayloadFormatError('each stroke must be an array')
        result.append([_dict_to_command(c) for c in stroke])
    return result
