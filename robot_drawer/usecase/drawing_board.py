"""드로잉 보드 상태 저장소.

입력 수집기(터치 등)가 전달하는 점을 받아 진행 중인 스트로크와
완성된 드로잉을 관리한다. 렌더링 측은 읽기만 한다.
"""

import logging

from robot_drawer.domain.entities.drawing import Drawing, Stroke
from robot_drawer.domain.events.drawer_events import (
    DrawingClearedEvent,
    StrokeCompletedEvent,
)
from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.domain.value_objects.point import CanvasPoint
from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.ports.event_publisher import EventPublisher

logger = logging.getLogger(__name__)


class DrawingBoard:
    """드로잉 애플리케이션 상태.

    캔버스 밖의 점은 무시한다.

    Args:
        geometry: 캔버스 크기.
        event_publisher: 드로잉 변경 이벤트 발행자 (선택).
        compiler: 스트로크 완성 시 미리보기 컴파일에 사용 (선택).
    """

    def __init__(
        self,
        geometry: CanvasGeometry | None = None,
        event_publisher: EventPublisher | None = None,
        compiler: CompileDrawing | None = None,
    ) -> None:
        self._geometry = geometry or CanvasGeometry()
        self._event_publisher = event_publisher
        self._compiler = compiler
        self._drawing = Drawing()
        self._current: list[CanvasPoint] = []

    @property
    def drawing(self) -> Drawing:
        return self._drawing

    @property
    def strokes(self) -> tuple[Stroke, ...]:
        """완성된 스트로크 목록 (읽기 전용)."""
        return tuple(self._drawing.strokes)

    @property
    def current_stroke(self) -> tuple[CanvasPoint, ...]:
        """그리는 중인 스트로크의 점 목록."""
        return tuple(self._current)

    def begin_stroke(self, point: CanvasPoint) -> bool:
        """새 스트로크를 시작한다.

        Returns:
            점이 캔버스 안에 있어 기록되었으면 True.
        """
        self._current = []
        return self.add_point(point)

    def add_point(self, point: CanvasPoint) -> bool:
        """진행 중인 스트로크에 점을 추가한다.

        Returns:
            점이 캔버스 안에 있어 기록되었으면 True.
        """
        if not self._geometry.contains(point.x, point.y):
            return False
        self._current.append(point)
        return True

    def complete_stroke(self) -> Stroke | None:
        """진행 중인 스트로크를 완성하여 드로잉에 추가한다.

        Returns:
            추가된 스트로크. 점이 없으면 None.
        """
        if not self._current:
            return None

        stroke = Stroke.from_points(self._current)
        self._current = []
        self._drawing.append(stroke)

        if self._compiler is not None and logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                'Stroke %d commands: %s',
                len(self._drawing) - 1,
                self._compiler.compile_stroke(stroke),
            )

        if self._event_publisher is not None:
            self._event_publisher.publish(
                StrokeCompletedEvent(
                    stroke_index=len(self._drawing) - 1,
                    point_count=len(stroke),
                )
            )
        return stroke

    def clear(self) -> None:
        """모든 스트로크를 지운다."""
        count = len(self._drawing)
        self._drawing.clear()
        self._current = []
        logger.info('Drawing cleared (%d strokes)', count)

        if self._event_publisher is not None:
            self._event_publisher.publish(
                DrawingClearedEvent(stroke_count=count)
            )
