"""설정 포트 인터페이스.

애플리케이션 설정의 로딩을 추상화한다.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from robot_drawer.domain.value_objects.geometry import CanvasGeometry


@dataclass(frozen=True)
class PipelineConfig:
    """드로잉 → 명령 변환 파라미터.

    Args:
        refine_threshold: 경로 단순화 축별 최소 이동량 (cm).
        min_segment_distance: 명령을 만들 최소 구간 길이 (cm).
        turn_threshold_deg: 회전 명령을 만들 최소 각도 차이 (deg).
        initial_heading_deg: 로봇 출발 방향 (deg).
    """

    refine_threshold: float = 3.0
    min_segment_distance: float = 0.5
    turn_threshold_deg: float = 5.0
    initial_heading_deg: float = 90.0


@dataclass(frozen=True)
class LinkConfig:
    """무선 링크 설정.

    Args:
        backend: 링크 구현 ('ble' 또는 'mqtt').
        device_name: 접속할 로봇의 광고 이름.
        service_uuid: 명령 수신 GATT 서비스 UUID.
        characteristic_uuid: 명령 수신 GATT 특성 UUID.
        scan_timeout_sec: 스캔 제한 시간 (초).
        connect_timeout_sec: 연결 제한 시간 (초).
        write_timeout_sec: 청크 하나의 쓰기 응답 제한 시간 (초).
    """

    backend: str = 'ble'
    device_name: str = 'RobotDrawer_ESP32'
    service_uuid: str = '4fafc201-1fb5-459e-8fcc-c5c9c331914b'
    characteristic_uuid: str = 'beb5483e-36e1-4688-b7f5-ea07361b26a8'
    scan_timeout_sec: float = 10.0
    connect_timeout_sec: float = 10.0
    write_timeout_sec: float = 5.0


@dataclass(frozen=True)
class TransportConfig:
    """청크 분할/전송 설정.

    Args:
        chunk_size: 인코딩 전 청크 최대 문자 수.
        chunk_delay_sec: 청크 쓰기 사이 대기 시간 (초).
    """

    chunk_size: int = 180
    chunk_delay_sec: float = 0.05


@dataclass(frozen=True)
class MqttConfig:
    """MQTT 브로커 접속 설정 (mqtt 백엔드 전용).

    Args:
        broker_host: 브로커 호스트 주소.
        broker_port: 브로커 포트 번호.
        keepalive_sec: 연결 유지 간격 (초).
        reconnect_max_delay_sec: 재연결 최대 대기 시간 (초).
        topic_prefix: 피어 토픽 prefix.
        client_id: MQTT 클라이언트 ID.
    """

    broker_host: str = 'localhost'
    broker_port: int = 1883
    keepalive_sec: int = 60
    reconnect_max_delay_sec: int = 60
    topic_prefix: str = 'robot_drawer/v1'
    client_id: str = 'robot_drawer'


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 전체 설정.

    Args:
        canvas: 캔버스/지면 크기.
        pipeline: 명령 변환 파라미터.
        link: 무선 링크 설정.
        transport: 청크 전송 설정.
        mqtt: MQTT 브로커 설정.
    """

    canvas: CanvasGeometry = field(default_factory=CanvasGeometry)
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    link: LinkConfig = field(default_factory=LinkConfig)
    transport: TransportConfig = field(default_factory=TransportConfig)
    mqtt: MqttConfig = field(default_factory=MqttConfig)


class ConfigPort(ABC):
    """설정 로더 인터페이스."""

    @abstractmethod
    def load(self) -> AppConfig:
        """설정을 로드한다.

        Returns:
            애플리케이션 설정.
        """
