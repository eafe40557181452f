"""YamlConfigLoader 유닛 테스트."""

import pytest
import yaml

from robot_drawer.infra.config.yaml_config_loader import YamlConfigLoader
from robot_drawer.usecase.ports.config_port import AppConfig


@pytest.fixture
def config_yaml(tmp_path):
    """임시 설정 파일을 생성한다."""
    data = {
        'robot_drawer': {
            'ros__parameters': {
                'canvas': {
                    'width': 400,
                    'height': 300,
                    'ground_width_cm': 80,
                    'ground_height_cm': 60,
                },
                'pipeline': {'refine_threshold': 2.0},
                'link': {
                    'backend': 'mqtt',
                    'device_name': 'TestBot',
                    'scan_timeout_sec': 3,
                },
                'transport': {'chunk_size': 100, 'chunk_delay_sec': 0.1},
                'mqtt': {'broker_host': '10.0.0.5', 'broker_port': 1884},
            }
        }
    }
    path = tmp_path / 'params.yaml'
    with open(path, 'w') as f:
        yaml.dump(data, f)
    return path


class TestYamlConfigLoader:
    """YamlConfigLoader 테스트."""

    def test_load_canvas_section(self, config_yaml):
        """canvas 섹션을 CanvasGeometry로 변환한다."""
        config = YamlConfigLoader(config_yaml).load()

        assert config.canvas.canvas_width == 400.0
        assert config.canvas.canvas_height == 300.0
        assert config.canvas.ground_width_cm == 80.0
        assert config.canvas.ground_height_cm == 60.0

    def test_load_link_section(self, config_yaml):
        """link 섹션 값과 타입을 변환한다."""
        config = YamlConfigLoader(str(config_yaml)).load()

        assert config.link.backend == 'mqtt'
        assert config.link.device_name == 'TestBot'
        assert config.link.scan_timeout_sec == 3.0
        assert isinstance(config.link.scan_timeout_sec, float)

    def test_load_transport_and_mqtt(self, config_yaml):
        config = YamlConfigLoader(config_yaml).load()

        assert config.transport.chunk_size == 100
        assert config.transport.chunk_delay_sec == 0.1
        assert config.mqtt.broker_host == '10.0.0.5'
        assert config.mqtt.broker_port == 1884

    def test_missing_keys_use_defaults(self, config_yaml):
        """지정하지 않은 키는 기본값을 사용한다."""
        config = YamlConfigLoader(config_yaml).load()
        defaults = AppConfig()

        assert config.pipeline.refine_threshold == 2.0
        assert config.pipeline.turn_threshold_deg == (
            defaults.pipeline.turn_threshold_deg
        )
        assert config.link.service_uuid == defaults.link.service_uuid
        assert config.mqtt.topic_prefix == defaults.mqtt.topic_prefix

    def test_flat_structure_without_wrapper(self, tmp_path):
        """ros__parameters 래퍼 없이도 읽는다."""
        path = tmp_path / 'flat.yaml'
        path.write_text('link:\n  device_name: FlatBot\n', encoding='utf-8')

        config = YamlConfigLoader(path).load()

        assert config.link.device_name == 'FlatBot'

    def test_missing_file_returns_defaults(self, tmp_path):
        """파일이 없으면 기본값을 사용한다."""
        config = YamlConfigLoader(tmp_path / 'missing.yaml').load()
        assert config == AppConfig()

    def test_invalid_yaml_returns_defaults(self, tmp_path):
        """dict가 아닌 YAML이면 기본값을 사용한다."""
        path = tmp_path / 'list.yaml'
        path.write_text('- a\n- b\n', encoding='utf-8')

        config = YamlConfigLoader(path).load()

        assert config == AppConfig()

    def test_packaged_defaults(self):
        """패키지에 포함된 기본 설정 파일을 읽는다."""
        config = YamlConfigLoader().load()

        assert config.link.device_name == 'RobotDrawer_ESP32'
        assert config.transport.chunk_size == 180
        assert config.canvas.canvas_width == 500.0
