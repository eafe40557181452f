"""RobotDrawer 도메인 이벤트."""

from robot_drawer.domain.events.drawer_events import (
    DomainEvent,
    DrawingClearedEvent,
    LinkStateChangedEvent,
    StrokeCompletedEvent,
    TransmissionCompletedEvent,
    TransmissionFailedEvent,
)

__all__ = [
    'DomainEvent',
    'DrawingClearedEvent',
    'LinkStateChangedEvent',
    'StrokeCompletedEvent',
    'TransmissionCompletedEvent',
    'TransmissionFailedEvent',
]
