"""paho-mqtt 래퍼 클라이언트.

MQTT 연결 관리, 자동 재연결, 와일드카드 구독 디스패치 등
paho-mqtt의 저수준 API를 캡슐화한다.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import threading

import paho.mqtt.client as mqtt

from robot_drawer.domain.exceptions import (
    LinkAdapterError,
    TransmitFailureError,
)
from robot_drawer.usecase.ports.config_port import MqttConfig

logger = logging.getLogger(__name__)

MessageCallback = Callable[[str, bytes], None]


class MqttClient:
    """paho-mqtt 래퍼.

    Args:
        config: MQTT 브로커 접속 설정.
        client_id: MQTT 클라이언트 ID. None이면 설정값 사용.
    """

    def __init__(self, config: MqttConfig, client_id: str | None = None) -> None:
        self._config = config
        self._client = mqtt.Client(
            mqtt.CallbackAPIVersion.VERSION2,
            client_id=client_id if client_id is not None else config.client_id,
            protocol=mqtt.MQTTv311,
        )
        self._lock = threading.Lock()
        self._connected = threading.Event()

        self._client.on_connect = self._on_connect
        self._client.on_disconnect = self._on_disconnect
        self._client.on_message = self._on_message

        self._client.reconnect_delay_set(
            min_delay=1,
            max_delay=config.reconnect_max_delay_sec,
        )

        # 구독 필터 → (콜백, QoS)
        self._subscriptions: dict[str, tuple[MessageCallback, int]] = {}
        self._disconnect_listeners: list[Callable[[], None]] = []

    @property
    def is_connected(self) -> bool:
        """MQTT 브로커 연결 여부."""
        return self._connected.is_set()

    def connect(self, wait_timeout_sec: float | None = None) -> None:
        """MQTT 브로커에 연결한다.

        Args:
            wait_timeout_sec: 연결 확인(CONNACK)까지 기다릴 시간.
                None이면 기다리지 않는다.

        Raises:
            LinkAdapterError: 브로커에 연결할 수 없을 때.
        """
        logger.info(
            'MQTT connecting to %s:%d',
            self._config.broker_host,
            self._config.broker_port,
        )
        try:
            self._client.connect(
                host=self._config.broker_host,
                port=self._config.broker_port,
                keepalive=self._config.keepalive_sec,
            )
        except OSError as exc:
            raise LinkAdapterError(
                f'MQTT broker unreachable: {exc}'
            ) from exc
        self._client.loop_start()

        if wait_timeout_sec is not None:
            if not self._connected.wait(wait_timeout_sec):
                raise LinkAdapterError(
                    f'MQTT broker did not acknowledge connection within '
                    f'{wait_timeout_sec:.1f}s'
                )

    def disconnect(self) -> None:
        """MQTT 브로커 연결을 종료한다."""
        logger.info('MQTT disconnecting')
        self._client.loop_stop()
        self._client.disconnect()
        self._connected.clear()

    def publish_and_wait(
        self,
        topic: str,
        payload: bytes,
        qos: int = 1,
        timeout_sec: float = 5.0,
    ) -> None:
        """메시지를 발행하고 브로커의 확인(PUBACK)을 기다린다.

        Args:
            topic: MQTT 토픽.
            payload: 원본 바이트 페이로드.
            qos: QoS 레벨 (1 이상이어야 확인을 받는다).
            timeout_sec: 확인 대기 시간 (초).

        Raises:
            TransmitFailureError: 발행 실패 또는 확인 시간 초과 시.
        """
        with self._lock:
            info = self._client.publish(topic, payload, qos=qos)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise TransmitFailureError(
                f'MQTT publish failed: topic={topic}, rc={info.rc}'
            )
        try:
            info.wait_for_publish(timeout=timeout_sec)
        except (RuntimeError, ValueError) as exc:
            raise TransmitFailureError(f'MQTT publish failed: {exc}') from exc
        if not info.is_published():
            raise TransmitFailureError(
                f'MQTT publish not acknowledged within {timeout_sec:.1f}s'
            )

    def subscribe(
        self, topic: str, callback: MessageCallback, qos: int = 0
    ) -> None:
        """토픽을 구독한다. '+', '#' 와일드카드를 사용할 수 있다.

        Args:
            topic: 구독할 MQTT 토픽 필터.
            callback: 메시지 수신 콜백 (topic, payload).
            qos: QoS 레벨.
        """
        with self._lock:
            self._subscriptions[topic] = (callback, qos)
            self._client.subscribe(topic, qos=qos)
            logger.info('MQTT subscribe requested: %s (qos=%d)', topic, qos)

    def unsubscribe(self, topic: str) -> None:
        """토픽 구독을 해제한다.

        Args:
            topic: 해제할 MQTT 토픽 필터.
        """
        with self._lock:
            self._subscriptions.pop(topic, None)
            if self.is_connected:
                self._client.unsubscribe(topic)

    def add_disconnect_listener(self, listener: Callable[[], None]) -> None:
        """브로커 연결이 끊겼을 때 호출할 리스너를 등록한다.

        리스너는 paho 네트워크 스레드에서 호출된다.
        """
        with self._lock:
            self._disconnect_listeners.append(listener)

    def _on_connect(
        self,
        client: mqtt.Client,
        userdata: object,
        flags: object,
        reason_code: object,
        properties: object = None,
    ) -> None:
        """연결 성공 콜백."""
        if getattr(reason_code, 'is_failure', False):
            logger.error('MQTT connection failed: %s', reason_code)
            return

        self._connected.set()
        logger.info('MQTT connected to broker')
        # 재연결 시 기존 구독 복원
        with self._lock:
            for topic, (_, qos) in self._subscriptions.items():
                self._client.subscribe(topic, qos=qos)
                logger.debug('MQTT re-subscribed: %s', topic)

    def _on_disconnect(
        self,
        client: mqtt.Client,
        userdata: object,
        flags: object,
        reason_code: object,
        properties: object = None,
    ) -> None:
        """연결 해제 콜백."""
        self._connected.clear()
        if getattr(reason_code, 'is_failure', False):
            logger.warning(
                'MQTT unexpected disconnect: %s, auto-reconnecting',
                reason_code,
            )

        with self._lock:
            listeners = list(self._disconnect_listeners)
        for listener in listeners:
            try:
                listener()
            except Exception:
                logger.exception('Error in MQTT disconnect listener')

    def _on_message(
        self,
        client: mqtt.Client,
        userdata: object,
        msg: mqtt.MQTTMessage,
    ) -> None:
        """메시지 수신 콜백."""
        with self._lock:
            callbacks = [
                callback
                for topic_filter, (callback, _) in self._subscriptions.items()
                if mqtt.topic_matches_sub(topic_filter, msg.topic)
            ]

        if not callbacks:
            logger.debug('No handler for topic: %s', msg.topic)
            return

        for callback in callbacks:
            try:
                callback(msg.topic, msg.payload)
            except Exception:
                logger.exception(
                    'Error in MQTT message handler: topic=%s', msg.topic
                )
