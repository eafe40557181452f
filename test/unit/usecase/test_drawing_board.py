"""DrawingBoard 유스케이스 단위 테스트."""

import logging
from unittest.mock import MagicMock

import pytest

from robot_drawer.domain.events import (
    DrawingClearedEvent,
    StrokeCompletedEvent,
)
from robot_drawer.domain.value_objects import CanvasPoint
from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.drawing_board import DrawingBoard


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def board(geometry, publisher):
    return DrawingBoard(geometry, publisher)


def _draw(board, *coords):
    first, *rest = coords
    board.begin_stroke(CanvasPoint(*first))
    for xy in rest:
        board.add_point(CanvasPoint(*xy))
    return board.complete_stroke()


class TestStrokeLifecycle:
    def test_complete_stroke(self, board):
        stroke = _draw(board, (10, 10), (20, 20), (30, 30))

        assert len(stroke) == 3
        assert board.strokes == (stroke,)
        assert board.current_stroke == ()

    def test_current_stroke_while_drawing(self, board):
        board.begin_stroke(CanvasPoint(1, 1))
        board.add_point(CanvasPoint(2, 2))

        assert board.current_stroke == (CanvasPoint(1, 1), CanvasPoint(2, 2))
        assert board.strokes == ()

    def test_begin_resets_unfinished_stroke(self, board):
        board.begin_stroke(CanvasPoint(1, 1))
        board.begin_stroke(CanvasPoint(5, 5))

        assert board.current_stroke == (CanvasPoint(5, 5),)

    def test_empty_stroke_is_not_added(self, board, publisher):
        assert board.complete_stroke() is None
        assert board.strokes == ()
        publisher.publish.assert_not_called()

    def test_strokes_keep_order(self, board):
        s1 = _draw(board, (10, 10), (20, 10))
        s2 = _draw(board, (30, 30))

        assert board.strokes == (s1, s2)
        assert list(board.drawing) == [s1, s2]


class TestCanvasBounds:
    def test_point_outside_canvas_is_ignored(self, board):
        board.begin_stroke(CanvasPoint(10, 10))

        assert not board.add_point(CanvasPoint(600, 10))
        assert not board.add_point(CanvasPoint(10, -1))
        assert board.add_point(CanvasPoint(500, 500))
        assert len(board.current_stroke) == 2

    def test_stroke_starting_outside(self, board):
        assert not board.begin_stroke(CanvasPoint(-5, 10))
        assert board.complete_stroke() is None


class TestEvents:
    def test_stroke_completed_event(self, board, publisher):
        _draw(board, (10, 10), (20, 20))
        _draw(board, (30, 30))

        events = [c.args[0] for c in publisher.publish.call_args_list]
        assert all(isinstance(e, StrokeCompletedEvent) for e in events)
        assert [(e.stroke_index, e.point_count) for e in events] == [
            (0, 2), (1, 1),
        ]

    def test_clear(self, board, publisher):
        _draw(board, (10, 10))
        _draw(board, (20, 20))
        publisher.reset_mock()

        board.clear()

        assert board.strokes == ()
        assert board.drawing.is_empty
        (event,) = [c.args[0] for c in publisher.publish.call_args_list]
        assert isinstance(event, DrawingClearedEvent)
        assert event.stroke_count == 2


class TestPreview:
    def test_logs_compiled_commands(self, geometry, caplog):
        board = DrawingBoard(geometry, compiler=CompileDrawing(geometry))
        caplog.set_level(
            logging.DEBUG, logger='robot_drawer.usecase.drawing_board'
        )

        _draw(board, (0, 500), (50, 500))

        assert 'Stroke 0 commands' in caplog.text
        assert 'turn_right' in caplog.text
