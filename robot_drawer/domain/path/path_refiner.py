"""지면 경로의 근접 중복점 제거."""

from collections.abc import Sequence

from robot_drawer.domain.value_objects.point import RealPoint

DEFAULT_REFINE_THRESHOLD = 3.0


def refine_path(
    path: Sequence[RealPoint],
    threshold: float = DEFAULT_REFINE_THRESHOLD,
) -> list[RealPoint]:
    """마지막으로 남긴 점과 너무 가까운 점을 제거한다.

    첫 점은 항상 남긴다. 이후 점은 마지막으로 남긴 점 대비
    x 또는 y 중 한 축이라도 ``threshold`` 이상 움직였을 때만 남긴다.
    유클리드 거리가 아닌 축별 비교이므로, 대각선으로 조금씩
    움직인 점은 실제 이동량이 threshold를 넘어도 제거될 수 있다.

    Args:
        path: 지면 좌표 경로.
        threshold: 축별 최소 이동량 (cm).

    Returns:
        단순화된 경로 (입력의 부분 수열).
    """
    if not path:
        return []

    refined = [path[0]]
    for point in path[1:]:
        last = refined[-1]
        dx = abs(point.x - last.x)
        dy = abs(point.y - last.y)
        if dx < threshold and dy < threshold:
            continue
        refined.append(point)
    return refined
