"""RobotDrawer 엔티티."""

from robot_drawer.domain.entities.command import CommandList, RobotCommand
from robot_drawer.domain.entities.drawing import Drawing, Stroke

__all__ = [
    'CommandList',
    'Drawing',
    'RobotCommand',
    'Stroke',
]
