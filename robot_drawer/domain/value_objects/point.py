"""좌표 관련 값 객체."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CanvasPoint:
    """캔버스 위의 한 점.

    원점은 캔버스 좌상단이며 y는 아래로 증가한다.

    Args:
        x: X 좌표 (px).
        y: Y 좌표 (px).
    """

    x: float
    y: float


@dataclass(frozen=True)
class RealPoint:
    """로봇 기준 좌표계(지면)의 한 점.

    원점은 작업 영역 좌하단이며 y는 위로 증가한다.
    생성 시 소수점 둘째 자리로 반올림된 값을 담는다.

    Args:
        x: X 좌표 (cm).
        y: Y 좌표 (cm).
    """

    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        """(x, y) 튜플로 반환한다."""
        return (self.x, self.y)
