"""무선 링크 세션 유스케이스.

스캔 → 연결 → 전송 → 연결 해제의 수명 주기를 명시적인 상태 머신으로
관리한다. 어댑터 실패는 예외 대신 LinkResult/TransmissionResult로
호출자에게 보고한다.

상태 전이:
    DISCONNECTED → SCANNING      connect() 요청
    SCANNING     → CONNECTING    이름이 일치하는 피어 발견
    SCANNING     → DISCONNECTED  스캔 시간 초과 / 사용자 취소
    CONNECTING   → CONNECTED     연결 + 서비스 탐색 성공
    CONNECTING   → DISCONNECTED  연결 실패
    CONNECTED    → DISCONNECTED  연결 해제 알림 / 사용자 해제
    (any)        → ERROR         권한 없음 / 어댑터 오류
    ERROR        → SCANNING      새 connect() 요청
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
import logging

from robot_drawer.domain.enums import LinkErrorKind, LinkState
from robot_drawer.domain.events.drawer_events import LinkStateChangedEvent
from robot_drawer.domain.exceptions import (
    InvalidStateTransitionError,
    LinkAdapterError,
    TransmitFailureError,
)
from robot_drawer.domain.value_objects.chunk import Chunk
from robot_drawer.domain.value_objects.link_result import (
    LinkResult,
    TransmissionResult,
)
from robot_drawer.usecase.ports.config_port import (
    LinkConfig,
    TransportConfig,
)
from robot_drawer.usecase.ports.event_publisher import EventPublisher
from robot_drawer.usecase.ports.link_adapter import (
    LinkAdapter,
    PeerHandle,
    PeerInfo,
    PermissionChecker,
)

logger = logging.getLogger(__name__)

_ALLOWED_TRANSITIONS: dict[LinkState, frozenset[LinkState]] = {
    LinkState.DISCONNECTED: frozenset({LinkState.SCANNING, LinkState.ERROR}),
    LinkState.SCANNING: frozenset({
        LinkState.CONNECTING, LinkState.DISCONNECTED, LinkState.ERROR,
    }),
    LinkState.CONNECTING: frozenset({
        LinkState.CONNECTED, LinkState.DISCONNECTED, LinkState.ERROR,
    }),
    LinkState.CONNECTED: frozenset({LinkState.DISCONNECTED, LinkState.ERROR}),
    LinkState.ERROR: frozenset({LinkState.SCANNING, LinkState.DISCONNECTED}),
}

# 스캔 취소를 나타내는 결과 값
_SCAN_CANCELLED = None


class LinkSession:
    """로봇과의 단일 무선 연결 슬롯.

    하나의 이벤트 루프에서 단일 소유자가 사용한다.
    동시에 두 번의 connect()나 두 번의 send()는 허용하지 않는다.

    Args:
        adapter: 무선 어댑터.
        permissions: 권한 확인기.
        config: 링크 설정.
        transport: 청크 전송 설정. None이면 기본값 사용.
        event_publisher: 상태 변경 이벤트 발행자 (선택).
    """

    def __init__(
        self,
        adapter: LinkAdapter,
        permissions: PermissionChecker,
        config: LinkConfig,
        transport: TransportConfig | None = None,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._adapter = adapter
        self._permissions = permissions
        self._config = config
        self._transport = transport or TransportConfig()
        self._event_publisher = event_publisher

        self._state = LinkState.DISCONNECTED
        self._reason = ''
        self._handle: PeerHandle | None = None
        self._link_lost: asyncio.Event | None = None

        # 스캔 세대: stop 이후 늦게 도착한 콜백을 무시하기 위해 사용
        self._scan_generation = 0
        self._pending_scan: asyncio.Future[PeerInfo | None] | None = None
        self._cancel_requested = False
        self._sending = False

    # -- 상태 조회 --

    @property
    def state(self) -> LinkState:
        """현재 세션 상태."""
        return self._state

    @property
    def reason(self) -> str:
        """마지막 상태 전이 사유."""
        return self._reason

    @property
    def error_reason(self) -> str | None:
        """ERROR 상태의 사유. ERROR가 아니면 None."""
        if self._state is LinkState.ERROR:
            return self._reason
        return None

    @property
    def is_connected(self) -> bool:
        return self._state is LinkState.CONNECTED and self._handle is not None

    @property
    def peer(self) -> PeerHandle | None:
        """연결된 피어 핸들."""
        return self._handle

    # -- 연결 --

    async def connect(self) -> LinkResult:
        """로봇을 스캔하고 연결한다.

        Returns:
            연결 결과. 실패 시 error에 실패 유형이 담긴다.
        """
        if self._state in (LinkState.SCANNING, LinkState.CONNECTING):
            return LinkResult.failure(
                LinkErrorKind.BUSY, 'Connection already in progress'
            )
        if self.is_connected:
            return LinkResult.success()

        self._cancel_requested = False
        self._transition(LinkState.SCANNING)

        if not await self._permissions.request():
            self._transition(LinkState.ERROR, 'no permission')
            return LinkResult.failure(
                LinkErrorKind.PERMISSION_DENIED, 'No BLE permission'
            )
        if self._cancel_requested:
            self._transition(LinkState.DISCONNECTED, 'cancelled')
            return LinkResult.failure(
                LinkErrorKind.CANCELLED, 'Scan cancelled'
            )

        scan_outcome = await self._scan_for_peer()
        if isinstance(scan_outcome, LinkResult):
            return scan_outcome

        return await self._connect_peer(scan_outcome)

    async def _scan_for_peer(self) -> PeerInfo | LinkResult:
        """이름이 일치하는 첫 피어를 찾을 때까지 스캔한다."""
        loop = asyncio.get_running_loop()
        found: asyncio.Future[PeerInfo | None] = loop.create_future()
        self._scan_generation += 1
        generation = self._scan_generation
        device_name = self._config.device_name

        def on_found(peer: PeerInfo) -> None:
            if generation != self._scan_generation or found.done():
                return
            if peer.name != device_name:
                return
            found.set_result(peer)

        def on_error(exc: Exception) -> None:
            if generation != self._scan_generation or found.done():
                return
            found.set_exception(exc)

        logger.info(
            'Scanning for %s (timeout=%.1fs)',
            device_name, self._config.scan_timeout_sec,
        )
        try:
            await self._adapter.start_scan(device_name, on_found, on_error)
        except LinkAdapterError as exc:
            logger.error('Failed to start scan: %s', exc)
            self._scan_generation += 1
            self._transition(LinkState.ERROR, 'scan error')
            return LinkResult.failure(LinkErrorKind.SCAN_ERROR, 'Scan error')

        self._pending_scan = found
        if self._cancel_requested and not found.done():
            found.set_result(_SCAN_CANCELLED)
        try:
            peer = await asyncio.wait_for(
                found, timeout=self._config.scan_timeout_sec
            )
        except TimeoutError:
            await self._stop_scan()
            logger.warning('Scan timeout: %s not found', device_name)
            self._transition(LinkState.DISCONNECTED, 'scan timeout')
            return LinkResult.failure(
                LinkErrorKind.SCAN_TIMEOUT, 'Scan timeout'
            )
        except LinkAdapterError as exc:
            await self._stop_scan()
            logger.error('Scan error: %s', exc)
            self._transition(LinkState.ERROR, 'scan error')
            return LinkResult.failure(LinkErrorKind.SCAN_ERROR, 'Scan error')
        finally:
            self._pending_scan = None

        # 상태 전이 전에 스캔을 먼저 멈춘다
        await self._stop_scan()

        if peer is _SCAN_CANCELLED:
            self._transition(LinkState.DISCONNECTED, 'cancelled')
            return LinkResult.failure(
                LinkErrorKind.CANCELLED, 'Scan cancelled'
            )

        logger.info('Found %s (%s)', peer.name, peer.peer_id)
        return peer

    async def _stop_scan(self) -> None:
        """스캔을 멈추고 이전 세대 콜백을 무효화한다."""
        self._scan_generation += 1
        try:
            await self._adapter.stop_scan()
        except LinkAdapterError as exc:
            logger.warning('Failed to stop scan: %s', exc)

    async def _connect_peer(self, peer: PeerInfo) -> LinkResult:
        """발견한 피어에 연결한다."""
        self._transition(LinkState.CONNECTING)
        logger.info('Connecting to %s...', peer.name)

        try:
            handle = await asyncio.wait_for(
                self._adapter.connect(peer.peer_id),
                timeout=self._config.connect_timeout_sec,
            )
        except (LinkAdapterError, TimeoutError) as exc:
            logger.warning('Connection to %s failed: %r', peer.name, exc)
            self._handle = None
            self._transition(LinkState.DISCONNECTED, 'connection error')
            return LinkResult.failure(
                LinkErrorKind.CONNECT_FAILURE, 'Connection error'
            )

        if self._cancel_requested:
            await self._close(handle)
            self._transition(LinkState.DISCONNECTED, 'cancelled')
            return LinkResult.failure(
                LinkErrorKind.CANCELLED, 'Connection cancelled'
            )

        self._handle = handle
        self._link_lost = asyncio.Event()
        self._adapter.on_disconnected(
            handle, lambda: self._handle_link_lost(handle)
        )
        self._transition(LinkState.CONNECTED)
        return LinkResult.success()

    def _handle_link_lost(self, handle: PeerHandle) -> None:
        """어댑터의 연결 해제 알림 처리."""
        if self._handle is not handle:
            # 이미 정리된 이전 연결의 알림
            return
        logger.warning('Disconnected from %s', handle.name)
        self._handle = None
        if self._link_lost is not None:
            self._link_lost.set()
        self._transition(LinkState.DISCONNECTED, 'link dropped')

    # -- 해제 --

    async def disconnect(self) -> None:
        """진행 중인 스캔을 취소하거나 연결을 종료한다."""
        if self._state in (LinkState.SCANNING, LinkState.CONNECTING):
            self._cancel_requested = True
            pending = self._pending_scan
            if pending is not None and not pending.done():
                pending.set_result(_SCAN_CANCELLED)
            return

        if self._state is LinkState.ERROR:
            self._transition(LinkState.DISCONNECTED)
            return

        handle = self._handle
        if handle is None:
            return

        self._handle = None
        if self._link_lost is not None:
            self._link_lost.set()
        self._transition(LinkState.DISCONNECTED, 'disconnected by user')
        await self._close(handle)

    async def _close(self, handle: PeerHandle) -> None:
        try:
            await self._adapter.disconnect(handle)
        except LinkAdapterError as exc:
            logger.warning('Failed to close %s: %s', handle.name, exc)

    # -- 전송 --

    async def send(self, chunks: Sequence[Chunk]) -> TransmissionResult:
        """청크를 순서대로 전송한다.

        각 청크의 쓰기 응답을 기다린 뒤 다음 청크를 보내며,
        청크 사이에 고정 지연을 둔다. 전송 중 연결이 끊기면
        남은 청크를 버리고 전달된 수를 보고한다.

        Args:
            chunks: 전송 순서의 청크 목록.

        Returns:
            전송 결과.
        """
        total = len(chunks)
        if not self.is_connected:
            return TransmissionResult(
                ok=False, delivered=0, total=total,
                error=LinkErrorKind.NOT_CONNECTED,
                message='Not connected',
            )
        if self._sending:
            return TransmissionResult(
                ok=False, delivered=0, total=total,
                error=LinkErrorKind.BUSY,
                message='Another transmission is in progress',
            )

        handle = self._handle
        link_lost = self._link_lost
        delivered = 0
        self._sending = True
        try:
            for chunk in chunks:
                if delivered:
                    await asyncio.sleep(self._transport.chunk_delay_sec)
                if not self._is_current(handle):
                    return self._dropped(delivered, total)

                try:
                    lost = await self._write_chunk(handle, chunk, link_lost)
                except (LinkAdapterError, TimeoutError) as exc:
                    if not self._is_current(handle):
                        return self._dropped(delivered, total)
                    logger.error(
                        'Chunk %d/%d write failed: %s',
                        delivered + 1, total, exc,
                    )
                    return TransmissionResult(
                        ok=False, delivered=delivered, total=total,
                        error=LinkErrorKind.TRANSMIT_FAILURE,
                        message=f'Failed to send commands: {exc}',
                    )

                if lost or not self._is_current(handle):
                    return self._dropped(delivered, total)
                delivered += 1
                logger.debug('Chunk %d/%d delivered', delivered, total)
        finally:
            self._sending = False

        logger.info('Sent %d chunks to %s', total, handle.name)
        return TransmissionResult(
            ok=True, delivered=delivered, total=total,
            message='Robot commands sent',
        )

    async def _write_chunk(
        self,
        handle: PeerHandle,
        chunk: Chunk,
        link_lost: asyncio.Event | None,
    ) -> bool:
        """청크 하나를 쓰고 응답 또는 연결 해제를 기다린다.

        Returns:
            쓰기 도중 연결이 끊겼으면 True.

        Raises:
            LinkAdapterError: 쓰기 실패 시.
            TransmitFailureError: 응답 시간 초과 시.
        """
        write = asyncio.ensure_future(
            self._adapter.write_chunk(
                handle,
                self._config.service_uuid,
                self._config.characteristic_uuid,
                chunk,
            )
        )
        waiters: set[asyncio.Future] = {write}
        lost_waiter = None
        if link_lost is not None:
            lost_waiter = asyncio.ensure_future(link_lost.wait())
            waiters.add(lost_waiter)

        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=self._config.write_timeout_sec,
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            if lost_waiter is not None:
                lost_waiter.cancel()

        if write in done:
            write.result()
            return False

        write.cancel()
        if lost_waiter is not None and lost_waiter in done:
            return True
        raise TransmitFailureError(
            f'chunk {chunk.index} write timed out after '
            f'{self._config.write_timeout_sec:.1f}s'
        )

    def _is_current(self, handle: PeerHandle | None) -> bool:
        return self.is_connected and self._handle is handle

    def _dropped(self, delivered: int, total: int) -> TransmissionResult:
        logger.warning(
            'Link dropped during transmission: %d/%d chunks delivered',
            delivered, total,
        )
        return TransmissionResult(
            ok=False, delivered=delivered, total=total,
            error=LinkErrorKind.LINK_DROPPED,
            message=(
                f'Disconnected during transmission '
                f'({delivered}/{total} chunks delivered)'
            ),
        )

    # -- 상태 전이 --

    def _transition(self, new_state: LinkState, reason: str = '') -> None:
        """상태를 전이하고 변경 이벤트를 발행한다.

        Raises:
            InvalidStateTransitionError: 허용되지 않는 전이일 때.
        """
        previous = self._state
        if new_state not in _ALLOWED_TRANSITIONS[previous]:
            raise InvalidStateTransitionError(
                f'Link state {previous} -> {new_state} is not allowed'
            )

        self._state = new_state
        self._reason = reason
        logger.info(
            'Link state %s -> %s%s',
            previous, new_state, f' ({reason})' if reason else '',
        )

        if self._event_publisher is not None:
            self._event_publisher.publish(
                LinkStateChangedEvent(
                    previous_state=previous,
                    new_state=new_state,
                    reason=reason,
                )
            )
