"""무선 링크 어댑터 포트 인터페이스.

스캔, 연결, 청크 쓰기, 연결 해제 알림을 제공하는 무선 어댑터를 추상화한다.
infra/ble/, infra/mqtt/ 레이어에서 구현한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from robot_drawer.domain.value_objects.chunk import Chunk


@dataclass(frozen=True)
class PeerInfo:
    """스캔으로 발견된 피어.

    Args:
        peer_id: 어댑터가 연결에 사용하는 식별자 (BLE 주소 등).
        name: 광고된 이름. 없으면 None.
    """

    peer_id: str
    name: str | None = None


@dataclass(frozen=True)
class PeerHandle:
    """연결된 피어 핸들.

    Args:
        peer_id: 피어 식별자.
        name: 피어 이름.
        native: 어댑터 내부 연결 객체.
    """

    peer_id: str
    name: str | None = None
    native: Any = field(default=None, compare=False, repr=False)


class LinkAdapter(ABC):
    """무선 어댑터 인터페이스.

    모든 콜백은 세션의 이벤트 루프 스레드에서 호출되어야 한다.
    다른 스레드에서 이벤트를 받는 구현체는 루프로 넘겨서 호출한다.
    """

    @abstractmethod
    async def start_scan(
        self,
        name_filter: str | None,
        on_found: Callable[[PeerInfo], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """피어 스캔을 시작한다.

        Args:
            name_filter: 이 이름의 피어만 보고한다. None이면 전부.
            on_found: 피어 발견 시 호출할 콜백.
            on_error: 스캔 실패 시 호출할 콜백.

        Raises:
            LinkAdapterError: 스캔을 시작할 수 없을 때.
        """

    @abstractmethod
    async def stop_scan(self) -> None:
        """진행 중인 스캔을 중지한다. 스캔 중이 아니면 아무것도 하지 않는다."""

    @abstractmethod
    async def connect(self, peer_id: str) -> PeerHandle:
        """피어에 연결하고 서비스/특성을 탐색한다.

        Args:
            peer_id: 스캔으로 얻은 피어 식별자.

        Returns:
            연결된 피어 핸들.

        Raises:
            ConnectFailureError: 연결 또는 탐색 실패 시.
        """

    @abstractmethod
    async def write_chunk(
        self,
        handle: PeerHandle,
        service_id: str,
        characteristic_id: str,
        chunk: Chunk,
    ) -> None:
        """청크 하나를 쓰고 피어의 응답을 기다린다.

        Args:
            handle: 연결된 피어 핸들.
            service_id: 대상 서비스 UUID.
            characteristic_id: 대상 특성 UUID.
            chunk: 전송할 청크.

        Raises:
            TransmitFailureError: 쓰기 실패 시.
        """

    @abstractmethod
    def on_disconnected(
        self, handle: PeerHandle, callback: Callable[[], None]
    ) -> None:
        """피어 연결 해제 알림 콜백을 등록한다.

        Args:
            handle: 연결된 피어 핸들.
            callback: 연결 해제 시 호출할 콜백.
        """

    @abstractmethod
    async def disconnect(self, handle: PeerHandle) -> None:
        """피어 연결을 종료한다."""


class PermissionChecker(ABC):
    """무선/위치 권한 확인 인터페이스."""

    @abstractmethod
    async def request(self) -> bool:
        """필요한 권한을 요청하고 모두 허용되었는지 반환한다."""
