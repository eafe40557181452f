"""명령 직렬화 단위 테스트."""

import json

import pytest

from robot_drawer.domain.entities import RobotCommand
from robot_drawer.domain.exceptions import PayloadFormatError
from robot_drawer.infra.transport.command_serializer import (
    command_to_dict,
    deserialize_command_lists,
    serialize_command_lists,
)


class TestSerialize:
    def test_wire_format(self):
        payload = serialize_command_lists([
            [RobotCommand.right(90), RobotCommand.forward(10.0)],
        ])
        assert payload == (
            '[[{"type":"turn_right","value":90},'
            '{"type":"move_forward","value":10.0}]]'
        )

    def test_empty_drawing(self):
        assert serialize_command_lists([]) == "[]"

    def test_empty_stroke_is_kept(self):
        payload = serialize_command_lists([[], [RobotCommand.forward(1.0)]])
        assert json.loads(payload)[0] == []

    def test_turn_float_becomes_int(self):
        assert command_to_dict(RobotCommand.left(45.0)) == {
            "type": "turn_left", "value": 45,
        }

    def test_move_stays_float(self):
        data = command_to_dict(RobotCommand.forward(3.0))
        assert isinstance(data["value"], float)

    def test_stroke_order_preserved(self):
        payload = serialize_command_lists([
            [RobotCommand.forward(1.0)],
            [RobotCommand.forward(2.0)],
        ])
        data = json.loads(payload)
        assert [s[0]["value"] for s in data] == [1.0, 2.0]


class TestDeserialize:
    def test_parses_wire_format(self):
        result = deserialize_command_lists(
            '[[{"type":"turn_left","value":90},'
            '{"type":"move_forward","value":2.5}],[]]'
        )
        assert result == [
            [RobotCommand.left(90), RobotCommand.forward(2.5)],
            [],
        ]

    @pytest.mark.parametrize("payload", [
        "not json",
        '{"type":"move_forward"}',
        "[1]",
        '[[{"type":"jump","value":1}]]',
        '[[{"type":"move_forward"}]]',
        '[[{"type":"move_forward","value":"1"}]]',
        '[[{"type":"move_forward","value":true}]]',
        '[[{"type":"move_forward","value":-1}]]',
        '[["move_forward"]]',
    ])
    def test_rejects_malformed_payload(self, payload):
        with pytest.raises(PayloadFormatError):
            deserialize_command_lists(payload)
