"""YAML 파일 기반 설정 로더 구현체."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.usecase.ports.config_port import (
    AppConfig,
    ConfigPort,
    LinkConfig,
    MqttConfig,
    PipelineConfig,
    TransportConfig,
)

logger = logging.getLogger(__name__)

_DEFAULT_CONFIG_PATH = (
    Path(__file__).resolve().parent.parent.parent
    / "config"
    / "default_params.yaml"
)


class YamlConfigLoader(ConfigPort):
    """ConfigPort의 YAML 파일 구현체.

    YAML 파일에서 설정을 읽어 AppConfig로 변환한다.
    파일이 없거나 형식이 잘못되었으면 기본값을 사용한다.

    Args:
        config_path: YAML 설정 파일 경로. None이면 기본 경로 사용.
    """

    def __init__(self, config_path: Path | str | None = None) -> None:
        self._path = Path(config_path) if config_path else _DEFAULT_CONFIG_PATH

    def load(self) -> AppConfig:
        """YAML 파일에서 설정을 로드한다."""
        raw = self._read_yaml()
        params = self._extract_params(raw)

        canvas_data = params.get("canvas", {})
        pipeline_data = params.get("pipeline", {})
        link_data = params.get("link", {})
        transport_data = params.get("transport", {})
        mqtt_data = params.get("mqtt", {})

        defaults = AppConfig()
        config = AppConfig(
            canvas=CanvasGeometry(
                canvas_width=float(canvas_data.get(
                    "width", defaults.canvas.canvas_width
                )),
                canvas_height=float(canvas_data.get(
                    "height", defaults.canvas.canvas_height
                )),
                ground_width_cm=float(canvas_data.get(
                    "ground_width_cm", defaults.canvas.ground_width_cm
                )),
                ground_height_cm=float(canvas_data.get(
                    "ground_height_cm", defaults.canvas.ground_height_cm
                )),
            ),
            pipeline=PipelineConfig(
                refine_threshold=float(pipeline_data.get(
                    "refine_threshold", defaults.pipeline.refine_threshold
                )),
                min_segment_distance=float(pipeline_data.get(
                    "min_segment_distance",
                    defaults.pipeline.min_segment_distance,
                )),
                turn_threshold_deg=float(pipeline_data.get(
                    "turn_threshold_deg",
                    defaults.pipeline.turn_threshold_deg,
                )),
                initial_heading_deg=float(pipeline_data.get(
                    "initial_heading_deg",
                    defaults.pipeline.initial_heading_deg,
                )),
            ),
            link=LinkConfig(
                backend=link_data.get("backend", defaults.link.backend),
                device_name=link_data.get(
                    "device_name", defaults.link.device_name
                ),
                service_uuid=link_data.get(
                    "service_uuid", defaults.link.service_uuid
                ),
                characteristic_uuid=link_data.get(
                    "characteristic_uuid", defaults.link.characteristic_uuid
                ),
                scan_timeout_sec=float(link_data.get(
                    "scan_timeout_sec", defaults.link.scan_timeout_sec
                )),
                connect_timeout_sec=float(link_data.get(
                    "connect_timeout_sec", defaults.link.connect_timeout_sec
                )),
                write_timeout_sec=float(link_data.get(
                    "write_timeout_sec", defaults.link.write_timeout_sec
                )),
            ),
            transport=TransportConfig(
                chunk_size=int(transport_data.get(
                    "chunk_size", defaults.transport.chunk_size
                )),
                chunk_delay_sec=float(transport_data.get(
                    "chunk_delay_sec", defaults.transport.chunk_delay_sec
                )),
            ),
            mqtt=MqttConfig(
                broker_host=mqtt_data.get(
                    "broker_host", defaults.mqtt.broker_host
                ),
                broker_port=int(mqtt_data.get(
                    "broker_port", defaults.mqtt.broker_port
                )),
                keepalive_sec=int(mqtt_data.get(
                    "keepalive_sec", defaults.mqtt.keepalive_sec
                )),
                reconnect_max_delay_sec=int(mqtt_data.get(
                    "reconnect_max_delay_sec",
                    defaults.mqtt.reconnect_max_delay_sec,
                )),
                topic_prefix=mqtt_data.get(
                    "topic_prefix", defaults.mqtt.topic_prefix
                ),
                client_id=mqtt_data.get("client_id", defaults.mqtt.client_id),
            ),
        )

        logger.info("Config loaded from %s", self._path)
        return config

    def _read_yaml(self) -> dict[str, Any]:
        """YAML 파일을 dict로 읽는다."""
        if not self._path.exists():
            logger.warning(
                "Config file not found: %s, using defaults", self._path
            )
            return {}

        with open(self._path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            logger.warning("Invalid YAML format, using defaults")
            return {}

        return data

    def _extract_params(self, raw: dict[str, Any]) -> dict[str, Any]:
        """YAML 구조에서 ros__parameters 를 추출한다."""
        # robot_drawer.ros__parameters 구조 탐색
        node_data = raw.get("robot_drawer", raw)
        if isinstance(node_data, dict):
            return node_data.get("ros__parameters", node_data)
        return {}
