"""MQTT 통신 인프라 (브로커 경유 LinkAdapter 구현)."""

from robot_drawer.infra.mqtt.mqtt_client import MqttClient
from robot_drawer.infra.mqtt.mqtt_link_adapter import MqttLinkAdapter

__all__ = ["MqttClient", "MqttLinkAdapter"]
