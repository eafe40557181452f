"""BLE 통신 인프라 (bleak 기반 LinkAdapter 구현)."""

from robot_drawer.infra.ble.bleak_link_adapter import BleakLinkAdapter

__all__ = ["BleakLinkAdapter"]
