"""캔버스와 지면 크기 값 객체."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasGeometry:
    """캔버스(px)와 실제 작업 영역(cm)의 크기.

    Args:
        canvas_width: 캔버스 너비 (px).
        canvas_height: 캔버스 높이 (px).
        ground_width_cm: 작업 영역 너비 (cm).
        ground_height_cm: 작업 영역 높이 (cm).
    """

    canvas_width: float = 500.0
    canvas_height: float = 500.0
    ground_width_cm: float = 100.0
    ground_height_cm: float = 100.0

    @property
    def scale_x(self) -> float:
        """px → cm 가로 배율."""
        return self.ground_width_cm / self.canvas_width

    @property
    def scale_y(self) -> float:
        """px → cm 세로 배율."""
        return self.ground_height_cm / self.canvas_height

    def contains(self, x: float, y: float) -> bool:
        """점이 캔버스 경계 안(경계 포함)에 있는지 확인한다."""
        return 0 <= x <= self.canvas_width and 0 <= y <= self.canvas_height
