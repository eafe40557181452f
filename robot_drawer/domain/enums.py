"""RobotDrawer 도메인 열거형 정의."""

from enum import StrEnum


class CommandType(StrEnum):
    """로봇 이동 명령 유형.

    값은 로봇 펌웨어가 파싱하는 와이어 포맷의 ``type`` 문자열과 같다.
    """

    MOVE_FORWARD = 'move_forward'
    MOVE_BACKWARD = 'move_backward'
    TURN_LEFT = 'turn_left'
    TURN_RIGHT = 'turn_right'

    @property
    def is_turn(self) -> bool:
        """회전 명령 여부."""
        return self in (CommandType.TURN_LEFT, CommandType.TURN_RIGHT)


class LinkState(StrEnum):
    """링크 세션 상태."""

    DISCONNECTED = 'DISCONNECTED'
    SCANNING = 'SCANNING'
    CONNECTING = 'CONNECTING'
    CONNECTED = 'CONNECTED'
    ERROR = 'ERROR'


class LinkErrorKind(StrEnum):
    """링크 세션 실패 유형."""

    PERMISSION_DENIED = 'PERMISSION_DENIED'
    SCAN_TIMEOUT = 'SCAN_TIMEOUT'
    SCAN_ERROR = 'SCAN_ERROR'
    CONNECT_FAILURE = 'CONNECT_FAILURE'
    LINK_DROPPED = 'LINK_DROPPED'
    TRANSMIT_FAILURE = 'TRANSMIT_FAILURE'
    NOT_CONNECTED = 'NOT_CONNECTED'
    BUSY = 'BUSY'
    CANCELLED = 'CANCELLED'


class PeerPresence(StrEnum):
    """브로커 경유 피어의 연결 상태 (connection 토픽 값)."""

    ONLINE = 'ONLINE'
    OFFLINE = 'OFFLINE'
    CONNECTIONBROKEN = 'CONNECTIONBROKEN'
