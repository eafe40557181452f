"""SendDrawing 유스케이스 단위 테스트."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from robot_drawer.domain.entities import Stroke
from robot_drawer.domain.enums import LinkErrorKind
from robot_drawer.domain.events import (
    TransmissionCompletedEvent,
    TransmissionFailedEvent,
)
from robot_drawer.domain.value_objects import CanvasPoint, TransmissionResult
from robot_drawer.infra.transport import TransportFramer
from robot_drawer.infra.transport.command_serializer import (
    serialize_command_lists,
)
from robot_drawer.infra.transport.transport_framer import reassemble, unframe
from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.link_session import LinkSession
from robot_drawer.usecase.send_drawing import SendDrawing


@pytest.fixture
def session():
    session = MagicMock()
    session.is_connected = True
    session.send = AsyncMock(
        return_value=TransmissionResult(ok=True, delivered=1, total=1)
    )
    return session


@pytest.fixture
def publisher():
    return MagicMock()


@pytest.fixture
def compiler(geometry):
    return CompileDrawing(geometry)


@pytest.fixture
def usecase(session, compiler, publisher):
    return SendDrawing(session, compiler, TransportFramer(), publisher)


@pytest.fixture
def strokes(vertical_stroke):
    return [
        vertical_stroke,
        Stroke.from_points([CanvasPoint(0, 500), CanvasPoint(50, 500)]),
    ]


def _published(publisher):
    return [c.args[0] for c in publisher.publish.call_args_list]


class TestNotConnected:
    def test_rejects_without_transmitting(self, usecase, session, strokes):
        session.is_connected = False

        result = asyncio.run(usecase.execute(strokes))

        assert result.error is LinkErrorKind.NOT_CONNECTED
        assert result.message == 'Please connect to your robot first.'
        session.send.assert_not_awaited()

    def test_publishes_failure(self, usecase, session, publisher, strokes):
        session.is_connected = False

        asyncio.run(usecase.execute(strokes))

        (event,) = _published(publisher)
        assert isinstance(event, TransmissionFailedEvent)
        assert event.error is LinkErrorKind.NOT_CONNECTED


class TestSend:
    def test_sends_framed_payload(self, usecase, session, compiler, strokes):
        result = asyncio.run(usecase.execute(strokes))

        assert result.ok
        (chunks,) = session.send.await_args.args
        assert reassemble(chunks) == serialize_command_lists(
            compiler.execute(strokes)
        )

    def test_publishes_completion(self, usecase, publisher, strokes):
        asyncio.run(usecase.execute(strokes))

        (event,) = _published(publisher)
        assert isinstance(event, TransmissionCompletedEvent)
        assert event.stroke_count == 2
        assert event.chunk_count == 1

    def test_failure_is_reported(self, usecase, session, publisher, strokes):
        session.send.return_value = TransmissionResult(
            ok=False, delivered=1, total=3,
            error=LinkErrorKind.LINK_DROPPED,
            message='Disconnected during transmission (1/3 chunks delivered)',
        )

        result = asyncio.run(usecase.execute(strokes))

        assert result.error is LinkErrorKind.LINK_DROPPED
        (event,) = _published(publisher)
        assert isinstance(event, TransmissionFailedEvent)
        assert event.delivered == 1
        assert event.total == 3

    def test_empty_drawing(self, usecase, session):
        asyncio.run(usecase.execute([]))

        (chunks,) = session.send.await_args.args
        assert reassemble(chunks) == '[]'


class TestEndToEnd:
    def test_robot_receives_compiled_drawing(
        self, make_adapter, make_permissions, link_config, transport_config,
        robot_peer, compiler, strokes,
    ):
        adapter = make_adapter(peers=[robot_peer])
        session = LinkSession(
            adapter, make_permissions(), link_config, transport_config
        )
        usecase = SendDrawing(session, compiler, TransportFramer(chunk_size=20))

        async def scenario():
            await session.connect()
            return await usecase.execute(strokes)

        result = asyncio.run(scenario())

        assert result.ok
        assert result.total == len(adapter.writes) > 1
        assert unframe(adapter.writes) == compiler.execute(strokes)
