"""스트로크와 드로잉 엔티티."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from robot_drawer.domain.value_objects.point import CanvasPoint


@dataclass(frozen=True)
class Stroke:
    """한 번의 연속된 손그림 제스처.

    점 순서는 입력된 시간 순서와 같다.

    Args:
        points: 캔버스 점 목록.
    """

    points: tuple[CanvasPoint, ...] = ()

    @classmethod
    def from_points(cls, points: Sequence[CanvasPoint]) -> 'Stroke':
        return cls(points=tuple(points))

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[CanvasPoint]:
        return iter(self.points)


@dataclass
class Drawing:
    """완성된 스트로크의 순서 있는 모음.

    스트로크는 추가만 가능하며, 추가된 뒤에는 변경되지 않는다.

    Args:
        strokes: 완성된 스트로크 목록.
    """

    strokes: list[Stroke] = field(default_factory=list)

    def append(self, stroke: Stroke) -> None:
        """완성된 스트로크를 추가한다."""
        self.strokes.append(stroke)

    def clear(self) -> None:
        """모든 스트로크를 제거한다."""
        self.strokes.clear()

    @property
    def is_empty(self) -> bool:
        return not self.strokes

    def __len__(self) -> int:
        return len(self.strokes)

    def __iter__(self) -> Iterator[Stroke]:
        return iter(self.strokes)
