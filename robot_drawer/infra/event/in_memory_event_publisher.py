"""프로세스 내 동기 이벤트 버스."""

from collections import defaultdict
import logging
import threading

from robot_drawer.domain.events.drawer_events import DomainEvent
from robot_drawer.usecase.ports.event_publisher import (
    EventHandler,
    EventPublisher,
)

logger = logging.getLogger(__name__)


class InMemoryEventPublisher(EventPublisher):
    """EventPublisher의 인메모리 구현체.

    publish()를 호출한 스레드에서 핸들러를 바로 실행한다.
    한 핸들러가 실패해도 나머지 핸들러는 계속 호출된다.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: defaultdict[
            type[DomainEvent], list[EventHandler]
        ] = defaultdict(list)

    def _handlers_for(
        self, event_type: type[DomainEvent]
    ) -> list[EventHandler]:
        with self._lock:
            return [
                handler
                for registered, handlers in self._handlers.items()
                if issubclass(event_type, registered)
                for handler in handlers
            ]

    def publish(self, event: DomainEvent) -> None:
        event_name = type(event).__name__
        handlers = self._handlers_for(type(event))
        logger.debug('Dispatching %s to %d handlers', event_name, len(handlers))

        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception('Event handler failed for %s', event_name)

    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        with self._lock:
            self._handlers[event_type].append(handler)
        logger.debug('Handler registered for %s', event_type.__name__)

    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """등록되지 않은 핸들러는 무시한다."""
        with self._lock:
            handlers = self._handlers.get(event_type)
            if handlers and handler in handlers:
                handlers.remove(handler)
