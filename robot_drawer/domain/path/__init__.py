"""드로잉 → 로봇 명령 변환 파이프라인.

캔버스 좌표 변환, 경로 단순화, 방향 기반 명령 생성,
동일 명령 병합의 4단계를 순수 함수/클래스로 제공한다.
"""

from robot_drawer.domain.path.command_compiler import (
    CommandCompiler,
    normalize_angle,
)
from robot_drawer.domain.path.command_optimizer import optimize_commands
from robot_drawer.domain.path.coordinate_mapper import CoordinateMapper
from robot_drawer.domain.path.path_refiner import (
    DEFAULT_REFINE_THRESHOLD,
    refine_path,
)

__all__ = [
    'CommandCompiler',
    'CoordinateMapper',
    'DEFAULT_REFINE_THRESHOLD',
    'normalize_angle',
    'optimize_commands',
    'refine_path',
]
