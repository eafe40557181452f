"""드로잉 컴파일 유스케이스.

스트로크마다 좌표 변환 → 경로 단순화 → 명령 생성 → 명령 병합을
수행하여 스트로크 순서의 명령 목록을 만든다.
"""

from collections.abc import Iterable
import logging

from robot_drawer.domain.entities.command import CommandList
from robot_drawer.domain.entities.drawing import Stroke
from robot_drawer.domain.path.command_compiler import CommandCompiler
from robot_drawer.domain.path.command_optimizer import optimize_commands
from robot_drawer.domain.path.coordinate_mapper import CoordinateMapper
from robot_drawer.domain.path.path_refiner import refine_path
from robot_drawer.domain.value_objects.geometry import CanvasGeometry
from robot_drawer.domain.value_objects.point import RealPoint
from robot_drawer.usecase.ports.config_port import PipelineConfig

logger = logging.getLogger(__name__)


class CompileDrawing:
    """드로잉 → 스트로크별 명령 목록 변환.

    드로잉은 읽기만 하며 변경하지 않는다.

    Args:
        geometry: 캔버스/지면 크기.
        pipeline: 변환 파라미터.
    """

    def __init__(
        self,
        geometry: CanvasGeometry | None = None,
        pipeline: PipelineConfig | None = None,
    ) -> None:
        pipeline = pipeline or PipelineConfig()
        self._mapper = CoordinateMapper(geometry)
        self._refine_threshold = pipeline.refine_threshold
        self._compiler = CommandCompiler(
            initial_heading=pipeline.initial_heading_deg,
            min_distance=pipeline.min_segment_distance,
            turn_threshold=pipeline.turn_threshold_deg,
        )

    def refine_stroke(self, stroke: Stroke) -> list[RealPoint]:
        """스트로크를 지면 좌표로 변환하고 단순화한다."""
        real_path = self._mapper.map_stroke(stroke)
        return refine_path(real_path, self._refine_threshold)

    def compile_stroke(self, stroke: Stroke) -> CommandList:
        """스트로크 하나를 병합된 명령 목록으로 변환한다."""
        refined = self.refine_stroke(stroke)
        return optimize_commands(self._compiler.compile(refined))

    def execute(self, strokes: Iterable[Stroke]) -> list[CommandList]:
        """드로잉 전체를 변환한다.

        Args:
            strokes: 드로잉 또는 스트로크 목록.

        Returns:
            스트로크 순서의 명령 목록들.
        """
        command_lists = [self.compile_stroke(s) for s in strokes]
        logger.debug(
            'Compiled %d strokes into %d commands',
            len(command_lists), sum(len(c) for c in command_lists),
        )
        return command_lists
