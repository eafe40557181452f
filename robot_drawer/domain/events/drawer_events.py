"""RobotDrawer 도메인 이벤트 정의.

도메인/유스케이스 레이어에서 발생하는 이벤트를 정의한다.
UI 등 외부 레이어는 이벤트를 구독하여 화면 상태를 갱신한다.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from robot_drawer.domain.enums import LinkErrorKind, LinkState


@dataclass(frozen=True)
class DomainEvent:
    """도메인 이벤트 기본 클래스.

    Args:
        timestamp: 이벤트 발생 시각 (UTC).
    """

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class LinkStateChangedEvent(DomainEvent):
    """링크 세션 상태 변경 이벤트.

    Args:
        previous_state: 이전 상태.
        new_state: 새 상태.
        reason: 상태 변경 사유 (ERROR 사유, 타임아웃 등).
    """

    previous_state: LinkState = LinkState.DISCONNECTED
    new_state: LinkState = LinkState.DISCONNECTED
    reason: str = ''


@dataclass(frozen=True)
class StrokeCompletedEvent(DomainEvent):
    """스트로크 완성 이벤트.

    Args:
        stroke_index: 드로잉 내 스트로크 순번.
        point_count: 스트로크의 점 개수.
    """

    stroke_index: int = 0
    point_count: int = 0


@dataclass(frozen=True)
class DrawingClearedEvent(DomainEvent):
    """드로잉 초기화 이벤트.

    Args:
        stroke_count: 제거된 스트로크 수.
    """

    stroke_count: int = 0


@dataclass(frozen=True)
class TransmissionCompletedEvent(DomainEvent):
    """드로잉 전송 완료 이벤트.

    Args:
        stroke_count: 전송된 스트로크 수.
        chunk_count: 전송된 청크 수.
    """

    stroke_count: int = 0
    chunk_count: int = 0


@dataclass(frozen=True)
class TransmissionFailedEvent(DomainEvent):
    """드로잉 전송 실패 이벤트.

    Args:
        error: 실패 유형.
        delivered: 전달된 청크 수.
        total: 전체 청크 수.
        message: 실패 메시지.
    """

    error: LinkErrorKind | None = None
    delivered: int = 0
    total: int = 0
    message: str = ''
