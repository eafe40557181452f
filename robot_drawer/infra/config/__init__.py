"""설정 로더 구현체."""

from robot_drawer.infra.config.yaml_config_loader import YamlConfigLoader

__all__ = ["YamlConfigLoader"]
