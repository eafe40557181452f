"""MQTT 브로커 경유 LinkAdapter 구현체.

무선 대신 브로커를 통해 로봇과 통신한다. 토픽 구조::

    {prefix}/{device_name}/connection   로봇이 발행 (retained, Last Will)
    {prefix}/{device_name}/commands     청크 발행 (QoS 1)

connection 토픽의 값은 ``{"connectionState": "ONLINE"}`` 형식의 JSON
또는 ``ONLINE`` 같은 평문이다. 스캔은 ONLINE 피어를 보고하고,
OFFLINE/CONNECTIONBROKEN이 오면 연결 해제로 처리한다.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
import json
import logging
import threading

from robot_drawer.domain.enums import PeerPresence
from robot_drawer.domain.exceptions import (
    ConnectFailureError,
    LinkAdapterError,
)
from robot_drawer.domain.value_objects.chunk import Chunk
from robot_drawer.infra.mqtt.mqtt_client import MqttClient
from robot_drawer.usecase.ports.link_adapter import (
    LinkAdapter,
    PeerHandle,
    PeerInfo,
)

logger = logging.getLogger(__name__)

_QOS_CONNECTION = 1
_QOS_COMMANDS = 1


def parse_presence(payload: bytes) -> PeerPresence:
    """connection 토픽 페이로드를 해석한다.

    Raises:
        ValueError: 알 수 없는 형식일 때.
    """
    text = payload.decode('utf-8').strip()
    if text.startswith('{'):
        data = json.loads(text)
        text = data.get('connectionState', '')
    return PeerPresence(text)


class MqttLinkAdapter(LinkAdapter):
    """LinkAdapter의 MQTT 구현체.

    paho 네트워크 스레드에서 받은 이벤트는 세션의 이벤트 루프로 넘겨서
    콜백을 호출한다.

    Args:
        mqtt_client: MQTT 클라이언트 래퍼.
        topic_prefix: 토픽 prefix.
        broker_timeout_sec: 브로커 연결 확인 대기 시간 (초).
        publish_timeout_sec: 청크 발행 확인 대기 시간 (초).
    """

    def __init__(
        self,
        mqtt_client: MqttClient,
        topic_prefix: str,
        broker_timeout_sec: float = 5.0,
        publish_timeout_sec: float = 5.0,
    ) -> None:
        self._client = mqtt_client
        self._prefix = topic_prefix.rstrip('/')
        self._broker_timeout_sec = broker_timeout_sec
        self._publish_timeout_sec = publish_timeout_sec

        self._lock = threading.Lock()
        self._loop: asyncio.AbstractEventLoop | None = None
        self._presence: dict[str, PeerPresence] = {}
        self._scan: tuple[
            str | None,
            Callable[[PeerInfo], None],
            Callable[[Exception], None],
        ] | None = None
        self._disconnect_callbacks: dict[str, Callable[[], None]] = {}
        self._subscribed = False

        self._client.add_disconnect_listener(self._on_broker_lost)

    def _build_topic(self, peer: str, topic_name: str) -> str:
        """피어 토픽 경로를 생성한다."""
        return f'{self._prefix}/{peer}/{topic_name}'

    async def _ensure_broker(self) -> None:
        """브로커 연결과 connection 토픽 구독을 보장한다."""
        self._loop = asyncio.get_running_loop()
        if not self._client.is_connected:
            await self._loop.run_in_executor(
                None, self._client.connect, self._broker_timeout_sec
            )
        if not self._subscribed:
            self._client.subscribe(
                self._build_topic('+', 'connection'),
                self._on_connection_message,
                qos=_QOS_CONNECTION,
            )
            self._subscribed = True

    # -- LinkAdapter 구현: 스캔 --

    async def start_scan(
        self,
        name_filter: str | None,
        on_found: Callable[[PeerInfo], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        """ONLINE 피어 탐색을 시작한다."""
        await self._ensure_broker()
        self._scan = (name_filter, on_found, on_error)
        logger.info('MQTT scan started: filter=%s', name_filter)

        # 이미 알고 있는 ONLINE 피어도 보고한다
        with self._lock:
            online = [
                peer for peer, presence in self._presence.items()
                if presence is PeerPresence.ONLINE
            ]
        for peer in online:
            self._loop.call_soon(self._dispatch_presence, peer,
                                 PeerPresence.ONLINE)

    async def stop_scan(self) -> None:
        """피어 탐색을 중지한다."""
        if self._scan is not None:
            logger.info('MQTT scan stopped')
        self._scan = None

    # -- LinkAdapter 구현: 연결 --

    async def connect(self, peer_id: str) -> PeerHandle:
        """피어가 ONLINE인지 확인하고 핸들을 반환한다."""
        await self._ensure_broker()
        with self._lock:
            presence = self._presence.get(peer_id)
        if presence is not PeerPresence.ONLINE:
            raise ConnectFailureError(
                f'peer {peer_id} is not online ({presence})'
            )
        logger.info('MQTT peer connected: %s', peer_id)
        return PeerHandle(
            peer_id=peer_id,
            name=peer_id,
            native=self._build_topic(peer_id, 'commands'),
        )

    async def write_chunk(
        self,
        handle: PeerHandle,
        service_id: str,
        characteristic_id: str,
        chunk: Chunk,
    ) -> None:
        """청크를 commands 토픽에 발행하고 PUBACK을 기다린다."""
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(
            None,
            self._client.publish_and_wait,
            handle.native,
            chunk.to_bytes(),
            _QOS_COMMANDS,
            self._publish_timeout_sec,
        )

    def on_disconnected(
        self, handle: PeerHandle, callback: Callable[[], None]
    ) -> None:
        """피어 OFFLINE 또는 브로커 연결 해제 시 호출할 콜백을 등록한다."""
        with self._lock:
            self._disconnect_callbacks[handle.peer_id] = callback

    async def disconnect(self, handle: PeerHandle) -> None:
        """피어 연결 콜백을 해제한다. 브로커 연결은 유지한다."""
        with self._lock:
            self._disconnect_callbacks.pop(handle.peer_id, None)
        logger.info('MQTT peer released: %s', handle.peer_id)

    def close(self) -> None:
        """브로커 연결을 종료한다."""
        if self._client.is_connected:
            self._client.disconnect()

    # -- paho 스레드 콜백 --

    def _on_connection_message(self, topic: str, payload: bytes) -> None:
        """connection 토픽 수신 콜백 (paho 스레드)."""
        peer = topic.split('/')[-2]
        try:
            presence = parse_presence(payload)
        except (ValueError, AttributeError) as exc:
            logger.warning(
                'Invalid connection message from %s: %s', peer, exc
            )
            return

        with self._lock:
            self._presence[peer] = presence
        logger.debug('Peer %s is %s', peer, presence)
        self._call_in_loop(self._dispatch_presence, peer, presence)

    def _on_broker_lost(self) -> None:
        """브로커 연결 해제 리스너 (paho 스레드)."""
        with self._lock:
            self._presence.clear()
        self._subscribed = False
        self._call_in_loop(self._dispatch_broker_lost)

    def _call_in_loop(self, func: Callable, *args: object) -> None:
        loop = self._loop
        if loop is None or loop.is_closed():
            return
        loop.call_soon_threadsafe(func, *args)

    # -- 이벤트 루프 디스패치 --

    def _dispatch_presence(self, peer: str, presence: PeerPresence) -> None:
        if presence is PeerPresence.ONLINE:
            scan = self._scan
            if scan is None:
                return
            name_filter, on_found, _ = scan
            if name_filter is None or peer == name_filter:
                on_found(PeerInfo(peer_id=peer, name=peer))
            return

        with self._lock:
            callback = self._disconnect_callbacks.pop(peer, None)
        if callback is not None:
            callback()

    def _dispatch_broker_lost(self) -> None:
        scan = self._scan
        if scan is not None:
            scan[2](LinkAdapterError('MQTT broker connection lost'))

        with self._lock:
            callbacks = list(self._disconnect_callbacks.values())
            self._disconnect_callbacks.clear()
        for callback in callbacks:
            callback()
