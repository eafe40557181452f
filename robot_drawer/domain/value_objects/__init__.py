"""RobotDrawer 값 객체 (불변, 동등성 기반 비교)."""

from robot_drawer.domain.value_objects.chunk import Chunk
from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.domain.value_objects.link_result import (
    LinkResult,
    TransmissionResult,
)
from robot_drawer.domain.value_objects.point import CanvasPoint, RealPoint

__all__ = [
    'CanvasGeometry',
    'CanvasPoint',
    'Chunk',
    'LinkResult',
    'RealPoint',
    'TransmissionResult',
]
