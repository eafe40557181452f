"""RobotDrawer 유스케이스 레이어.

도메인 로직을 포트를 통해 조율하는 애플리케이션 서비스를 정의한다.
domain 레이어만 의존하며, infra 레이어 의존성은 없다.
"""

from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.drawing_board import DrawingBoard
from robot_drawer.usecase.link_session import LinkSession
from robot_drawer.usecase.send_drawing import SendDrawing

__all__ = [
    "CompileDrawing",
    "DrawingBoard",
    "LinkSession",
    "SendDrawing",
]
