"""bleak 기반 BLE LinkAdapter 구현체.

GATT 특성 쓰기(응답 포함)로 청크를 전송한다. 청크의 base64 표현은
쓰기 API용 인코딩이며, 로봇은 디코딩된 원본 바이트를 받는다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging

from bleak import BleakClient, BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData
from bleak.exc import BleakError

from robot_drawer.domain.exceptions import (
    ConnectFailureError,
    LinkAdapterError,
    TransmitFailureError,
)
from robot_drawer.domain.value_objects.chunk import Chunk
from robot_drawer.usecase.ports.link_adapter import (
    LinkAdapter,
    PeerHandle,
    PeerInfo,
)

logger = logging.getLogger(__name__)


class BleakLinkAdapter(LinkAdapter):
    """LinkAdapter의 bleak 구현체.

    bleak 콜백은 이벤트 루프 스레드에서 호출되므로 그대로 전달한다.

    Args:
        service_uuid: 연결 시 존재를 확인할 서비스 UUID.
        characteristic_uuid: 연결 시 존재를 확인할 특성 UUID.
    """

    def __init__(
        self,
        service_uuid: str | None = None,
        characteristic_uuid: str | None = None,
    ) -> None:
        self._service_uuid = service_uuid
        self._characteristic_uuid = characteristic_uuid
        self._scanner: BleakScanner | None = None
        self._devices: dict[str, BLEDevice] = {}
        self._disconnect_callbacks: dict[str, Callable[[], None]] = {}

    # -- LinkAdapter 구현: 스캔 --

    async def start_scan(
        self,
        name_filter: str | None,
        on_found: Callable[[PeerInfo], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """BLE 광고 스캔을 시작한다."""
        if self._scanner is not None:
            raise LinkAdapterError('BLE scan already running')

        def detection_callback(
            device: BLEDevice, advertisement: AdvertisementData
        ) -> None:
            name = device.name or advertisement.local_name
            if name_filter is not None and name != name_filter:
                return
            self._devices[device.address] = device
            on_found(PeerInfo(peer_id=device.address, name=name))

        scanner = BleakScanner(detection_callback=detection_callback)
        try:
            await scanner.start()
        except (BleakError, OSError) as exc:
            raise LinkAdapterError(f'failed to start BLE scan: {exc}') from exc
        self._scanner = scanner
        logger.info('BLE scan started')

    async def stop_scan(self) -> None:
        """BLE 스캔을 중지한다."""
        scanner, self._scanner = self._scanner, None
        if scanner is None:
            return
        try:
            await scanner.stop()
        except (BleakError, OSError) as exc:
            raise LinkAdapterError(f'failed to stop BLE scan: {exc}') from exc
        logger.info('BLE scan stopped')

    # -- LinkAdapter 구현: 연결 --

    async def connect(self, peer_id: str) -> PeerHandle:
        """피어에 연결하고 명령 특성이 있는지 확인한다."""
        device = self._devices.get(peer_id)
        client = BleakClient(
            device if device is not None else peer_id,
            disconnected_callback=self._handle_disconnect,
        )
        try:
            await client.connect()
        except (BleakError, OSError) as exc:
            raise ConnectFailureError(
                f'failed to connect to {peer_id}: {exc}'
            ) from exc

        # bleak은 connect() 중에 GATT 서비스를 탐색한다
        missing = self._find_missing_gatt(client)
        if missing:
            await self._safe_disconnect(client)
            raise ConnectFailureError(f'{peer_id} does not expose {missing}')

        name = device.name if device is not None else None
        logger.info('BLE connected: %s (%s)', name, peer_id)
        return PeerHandle(peer_id=peer_id, name=name, native=client)

    def _find_missing_gatt(self, client: BleakClient) -> str | None:
        """필요한 서비스/특성이 없으면 그 UUID를 반환한다."""
        services = client.services
        if self._service_uuid is not None:
            service = services.get_service(self._service_uuid)
            if service is None:
                return f'service {self._service_uuid}'
            if self._characteristic_uuid is not None:
                if service.get_characteristic(
                    self._characteristic_uuid
                ) is None:
                    return f'characteristic {self._characteristic_uuid}'
        elif self._characteristic_uuid is not None:
            if services.get_characteristic(self._characteristic_uuid) is None:
                return f'characteristic {self._characteristic_uuid}'
        return None

    async def write_chunk(
        self,
        handle: PeerHandle,
        service_id: str,
        characteristic_id: str,
        chunk: Chunk,
    ) -> None:
        """청크를 특성에 쓰고 응답을 기다린다."""
        client: BleakClient = handle.native
        try:
            await client.write_gatt_char(
                characteristic_id, chunk.to_bytes(), response=True
            )
        except (BleakError, OSError) as exc:
            raise TransmitFailureError(
                f'failed to write chunk {chunk.index}: {exc}'
            ) from exc

    def on_disconnected(
        self, handle: PeerHandle, callback: Callable[[], None]
    ) -> None:
        """연결 해제 알림 콜백을 등록한다."""
        self._disconnect_callbacks[handle.peer_id] = callback

    async def disconnect(self, handle: PeerHandle) -> None:
        """피어 연결을 종료한다."""
        self._disconnect_callbacks.pop(handle.peer_id, None)
        client: BleakClient = handle.native
        try:
            await client.disconnect()
        except (BleakError, OSError) as exc:
            raise LinkAdapterError(
                f'failed to disconnect {handle.peer_id}: {exc}'
            ) from exc

    async def _safe_disconnect(self, client: BleakClient) -> None:
        try:
            await client.disconnect()
        except (BleakError, OSError) as exc:
            logger.warning('BLE disconnect after failed setup: %s', exc)

    def _handle_disconnect(self, client: BleakClient) -> None:
        """bleak 연결 해제 콜백."""
        logger.info('BLE disconnected: %s', client.address)
        callback = self._disconnect_callbacks.pop(client.address, None)
        if callback is not None:
            callback()
