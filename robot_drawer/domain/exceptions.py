"""RobotDrawer 도메인 예외 정의."""


class DomainError(Exception):
    """도메인 계층 기본 예외."""


class InvalidStateTransitionError(DomainError):
    """허용되지 않는 링크 세션 상태 전이 시."""


class LinkAdapterError(DomainError):
    """무선 어댑터 수준의 예기치 않은 실패 시."""


class ConnectFailureError(LinkAdapterError):
    """피어 연결 또는 서비스 탐색 실패 시."""


class TransmitFailureError(LinkAdapterError):
    """청크 쓰기 실패 또는 응답 시간 초과 시."""


class PayloadFormatError(DomainError):
    """수신 페이로드가 명령 와이어 포맷과 맞지 않을 때."""
