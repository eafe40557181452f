"""공통 테스트 fixture."""

import asyncio

import pytest

from robot_drawer.domain.entities.drawing import Stroke
from robot_drawer.domain.exceptions import TransmitFailureError
from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.domain.value_objects.point import CanvasPoint, RealPoint
from robot_drawer.usecase.ports.config_port import (
    AppConfig,
    LinkConfig,
    TransportConfig,
)
from robot_drawer.usecase.ports.link_adapter import (
    LinkAdapter,
    PeerHandle,
    PeerInfo,
    PermissionChecker,
)

ROBOT_NAME = "RobotDrawer_ESP32"


class FakeLinkAdapter(LinkAdapter):
    """스크립트 가능한 LinkAdapter 테스트 더블."""

    def __init__(
        self,
        peers=(),
        connect_error=None,
        start_scan_error=None,
        scan_error=None,
        fail_on_write=None,
        disconnect_on_write=None,
        write_delay=0.0,
    ):
        self.peers = list(peers)
        self.connect_error = connect_error
        self.start_scan_error = start_scan_error
        self.scan_error = scan_error
        self.fail_on_write = fail_on_write
        self.disconnect_on_write = disconnect_on_write
        self.write_delay = write_delay

        self.scanning = False
        self.scan_started = 0
        self.scan_stopped = 0
        self.connected_ids = []
        self.closed_handles = []
        self.writes = []
        self.write_targets = []
        self._on_found = None
        self._disconnect_callback = None

    async def start_scan(self, name_filter, on_found, on_error):
        if self.start_scan_error is not None:
            raise self.start_scan_error
        self.scan_started += 1
        self.scanning = True
        self._on_found = on_found
        loop = asyncio.get_running_loop()
        for peer in self.peers:
            loop.call_soon(on_found, peer)
        if self.scan_error is not None:
            loop.call_soon(on_error, self.scan_error)

    async def stop_scan(self):
        self.scanning = False
        self.scan_stopped += 1

    async def connect(self, peer_id):
        if self.connect_error is not None:
            raise self.connect_error
        self.connected_ids.append(peer_id)
        return PeerHandle(peer_id=peer_id, name=ROBOT_NAME)

    async def write_chunk(self, handle, service_id, characteristic_id, chunk):
        self.writes.append(chunk)
        self.write_targets.append((service_id, characteristic_id))
        index = len(self.writes) - 1
        if self.fail_on_write == index:
            raise TransmitFailureError("write rejected")
        if self.disconnect_on_write == index:
            self.drop_link()
        await asyncio.sleep(self.write_delay)

    def on_disconnected(self, handle, callback):
        self._disconnect_callback = callback

    async def disconnect(self, handle):
        self.closed_handles.append(handle)

    # -- 테스트 조작 --

    def drop_link(self):
        if self._disconnect_callback is not None:
            self._disconnect_callback()

    def emit_found(self, peer):
        self._on_found(peer)


class FakePermissionChecker(PermissionChecker):
    def __init__(self, granted=True):
        self.granted = granted
        self.requests = 0

    async def request(self):
        self.requests += 1
        return self.granted


@pytest.fixture
def geometry():
    return CanvasGeometry(
        canvas_width=500,
        canvas_height=500,
        ground_width_cm=100,
        ground_height_cm=100,
    )


@pytest.fixture
def robot_peer():
    return PeerInfo(peer_id="AA:BB:CC:DD:EE:FF", name=ROBOT_NAME)


@pytest.fixture
def other_peer():
    return PeerInfo(peer_id="11:22:33:44:55:66", name="SomeHeadphones")


@pytest.fixture
def link_config():
    return LinkConfig(
        device_name=ROBOT_NAME,
        scan_timeout_sec=0.2,
        connect_timeout_sec=1.0,
        write_timeout_sec=1.0,
    )


@pytest.fixture
def transport_config():
    return TransportConfig(chunk_size=180, chunk_delay_sec=0.0)


@pytest.fixture
def sample_config(geometry, link_config, transport_config):
    return AppConfig(
        canvas=geometry,
        link=link_config,
        transport=transport_config,
    )


@pytest.fixture
def square_path():
    """한 변이 10cm인 정사각형 (출발 방향 +y)."""
    return [
        RealPoint(0.0, 0.0),
        RealPoint(0.0, 10.0),
        RealPoint(10.0, 10.0),
        RealPoint(10.0, 0.0),
        RealPoint(0.0, 0.0),
    ]


@pytest.fixture
def vertical_stroke():
    """캔버스 왼쪽 아래에서 위로 그은 스트로크 (지면 0 → 10cm)."""
    return Stroke.from_points(
        [CanvasPoint(0.0, 500.0 - 5.0 * i) for i in range(11)]
    )


@pytest.fixture
def make_adapter():
    """FakeLinkAdapter 생성 팩토리."""
    return FakeLinkAdapter


@pytest.fixture
def make_permissions():
    """FakePermissionChecker 생성 팩토리."""
    return FakePermissionChecker
