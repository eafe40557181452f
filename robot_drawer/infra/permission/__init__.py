"""권한 확인 구현체."""

from robot_drawer.infra.permission.static_permission_checker import (
    StaticPermissionChecker,
)

__all__ = ["StaticPermissionChecker"]
