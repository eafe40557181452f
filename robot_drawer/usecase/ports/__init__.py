"""유스케이스 포트 인터페이스 (ABC).

infra 레이어에서 구현해야 하는 추상 인터페이스를 정의한다.
"""

from robot_drawer.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    LinkConfig,
    MqttConfig,
    PipelineConfig,
    TransportConfig,
)
from robot_drawer.usecase.ports.event_publisher import (
    EventHandler,
    EventPublisher,
)
from robot_drawer.usecase.ports.link_adapter import (
    LinkAdapter,
    PeerHandle,
    PeerInfo,
    PermissionChecker,
)
from robot_drawer.usecase.ports.payload_framer import PayloadFramer

__all__ = [
    "AppConfig",
    "ConfigPort",
    "EventHandler",
    "EventPublisher",
    "LinkAdapter",
    "LinkConfig",
    "MqttConfig",
    "PayloadFramer",
    "PeerHandle",
    "PeerInfo",
    "PermissionChecker",
    "PipelineConfig",
    "TransportConfig",
]
