"""단순화된 경로 → 로봇 이동 명령 변환.

로봇은 경로 첫 점에서 +y 방향(90°)을 바라보고 출발한다고 가정한다.
각 구간마다 목표 방향과 현재 방향의 차이만큼 제자리 회전한 뒤
구간 길이만큼 전진한다. 후진 명령은 생성하지 않는다.
"""

from __future__ import annotations

from collections.abc import Sequence
import logging
import math

from robot_drawer.domain.entities.command import CommandList, RobotCommand
from robot_drawer.domain.path.rounding import round_half_up, round_tenths
from robot_drawer.domain.value_objects.point import RealPoint

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_HEADING = 90.0
DEFAULT_MIN_DISTANCE = 0.5
DEFAULT_TURN_THRESHOLD = 5.0


def normalize_angle(angle: float) -> float:
    """각도를 (-180, 180] 범위로 정규화한다."""
    while angle > 180:
        angle -= 360
    while angle <= -180:
        angle += 360
    return angle


class CommandCompiler:
    """경로를 회전/전진 명령 목록으로 변환한다.

    Args:
        initial_heading: 로봇의 출발 방향 (deg).
        min_distance: 이보다 짧은 구간은 무시한다 (cm).
        turn_threshold: 이 각도 이하의 방향 차이는 회전 없이 흡수한다 (deg).
    """

    def __init__(
        self,
        initial_heading: float = DEFAULT_INITIAL_HEADING,
        min_distance: float = DEFAULT_MIN_DISTANCE,
        turn_threshold: float = DEFAULT_TURN_THRESHOLD,
    ) -> None:
        self._initial_heading = initial_heading
        self._min_distance = min_distance
        self._turn_threshold = turn_threshold

    def compile(self, path: Sequence[RealPoint]) -> CommandList:
        """경로를 명령 목록으로 변환한다.

        Args:
            path: 단순화된 지면 좌표 경로.

        Returns:
            회전 → 전진 순서의 명령 목록. 점이 2개 미만이면 빈 목록.
        """
        if len(path) < 2:
            return []

        commands: CommandList = []
        current_angle = self._initial_heading

        for prev, curr in zip(path, path[1:]):
            dx = curr.x - prev.x
            dy = curr.y - prev.y
            distance = math.hypot(dx, dy)
            if distance < self._min_distance:
                continue

            target_angle = math.degrees(math.atan2(dy, dx))
            angle_diff = normalize_angle(target_angle - current_angle)

            # 작은 흔들림은 방향 갱신 없이 흡수한다
            if abs(angle_diff) > self._turn_threshold:
                if angle_diff > 0:
                    commands.append(
                        RobotCommand.left(int(round_half_up(angle_diff)))
                    )
                else:
                    commands.append(
                        RobotCommand.right(int(round_half_up(-angle_diff)))
                    )
                current_angle = target_angle

            commands.append(RobotCommand.forward(round_tenths(distance)))

        logger.debug(
            'Compiled %d points into %d commands', len(path), len(commands)
        )
        return commands
