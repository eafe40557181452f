"""이벤트 발행 포트.

링크 세션과 드로잉 보드가 상태 변화를 알리는 통로이다.
화면 갱신이나 로그 출력처럼 상태를 관찰하는 쪽은 이 포트에 구독한다.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from robot_drawer.domain.events.drawer_events import DomainEvent

# 이벤트 하나를 받는 구독 핸들러
EventHandler = Callable[[DomainEvent], None]


class EventPublisher(ABC):
    """도메인 이벤트 버스 인터페이스.

    구독은 이벤트 클래스 단위이며, 상위 클래스 구독은
    하위 클래스 이벤트도 받는다.
    """

    @abstractmethod
    def publish(self, event: DomainEvent) -> None:
        """구독 중인 핸들러에 이벤트를 전달한다."""

    @abstractmethod
    def subscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """핸들러를 등록한다.

        Args:
            event_type: 받을 이벤트 클래스.
            handler: 이벤트를 받을 콜러블.
        """

    @abstractmethod
    def unsubscribe(
        self, event_type: type[DomainEvent], handler: EventHandler
    ) -> None:
        """등록한 핸들러를 해제한다."""
