"""캔버스 좌표 → 로봇 기준 좌표 변환."""

from collections.abc import Iterable

from robot_drawer.domain.path.rounding import round_half_up
from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.domain.value_objects.point import CanvasPoint, RealPoint

# RealPoint 좌표 소수점 자릿수
_COORD_DIGITS = 2


class CoordinateMapper:
    """픽셀 좌표를 지면 좌표(cm)로 변환한다.

    캔버스는 좌상단 원점, 로봇 좌표계는 좌하단 원점이므로 y축을 뒤집는다.
    캔버스 밖의 점도 그대로 변환한다 (경계 검사는 입력 측 책임).

    Args:
        geometry: 캔버스/지면 크기. None이면 기본값 사용.
    """

    def __init__(self, geometry: CanvasGeometry | None = None) -> None:
        self._geometry = geometry or CanvasGeometry()

    @property
    def geometry(self) -> CanvasGeometry:
        return self._geometry

    def map(self, point: CanvasPoint) -> RealPoint:
        """캔버스 점 하나를 지면 좌표로 변환한다."""
        g = self._geometry
        return RealPoint(
            x=round_half_up(point.x * g.scale_x, _COORD_DIGITS),
            y=round_half_up(
                (g.canvas_height - point.y) * g.scale_y, _COORD_DIGITS
            ),
        )

    def map_stroke(self, points: Iterable[CanvasPoint]) -> list[RealPoint]:
        """점 목록을 순서대로 변환한다."""
        return [self.map(p) for p in points]
