"""이벤트 발행 인프라."""

from robot_drawer.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)

__all__ = ["InMemoryEventPublisher"]
