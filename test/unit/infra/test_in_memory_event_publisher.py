"""InMemoryEventPublisher 단위 테스트."""

import pytest

from robot_drawer.domain.enums import LinkState
from robot_drawer.domain.events import (
    DomainEvent,
    DrawingClearedEvent,
    LinkStateChangedEvent,
    StrokeCompletedEvent,
)
from robot_drawer.infra.event import InMemoryEventPublisher


@pytest.fixture
def publisher():
    return InMemoryEventPublisher()


class TestPublishSubscribe:
    def test_handler_receives_event(self, publisher):
        received = []
        publisher.subscribe(StrokeCompletedEvent, received.append)

        publisher.publish(StrokeCompletedEvent(stroke_index=2, point_count=7))

        assert len(received) == 1
        assert received[0].point_count == 7

    def test_multiple_handlers(self, publisher):
        r1, r2 = [], []
        publisher.subscribe(DrawingClearedEvent, r1.append)
        publisher.subscribe(DrawingClearedEvent, r2.append)

        publisher.publish(DrawingClearedEvent(stroke_count=3))

        assert len(r1) == 1
        assert len(r2) == 1

    def test_other_event_type_not_delivered(self, publisher):
        received = []
        publisher.subscribe(StrokeCompletedEvent, received.append)

        publisher.publish(DrawingClearedEvent())

        assert received == []

    def test_base_type_receives_all_events(self, publisher):
        received = []
        publisher.subscribe(DomainEvent, received.append)

        publisher.publish(StrokeCompletedEvent())
        publisher.publish(
            LinkStateChangedEvent(new_state=LinkState.SCANNING)
        )

        assert len(received) == 2

    def test_no_handlers_is_noop(self, publisher):
        publisher.publish(DrawingClearedEvent())


class TestErrorIsolation:
    def test_failing_handler_does_not_block_others(self, publisher):
        received = []

        def failing(event):
            raise RuntimeError("boom")

        publisher.subscribe(DrawingClearedEvent, failing)
        publisher.subscribe(DrawingClearedEvent, received.append)

        publisher.publish(DrawingClearedEvent())

        assert len(received) == 1


class TestUnsubscribe:
    def test_unsubscribed_handler_not_called(self, publisher):
        received = []
        publisher.subscribe(DrawingClearedEvent, received.append)
        publisher.unsubscribe(DrawingClearedEvent, received.append)

        publisher.publish(DrawingClearedEvent())

        assert received == []

    def test_unknown_handler_is_ignored(self, publisher):
        publisher.unsubscribe(DrawingClearedEvent, print)
