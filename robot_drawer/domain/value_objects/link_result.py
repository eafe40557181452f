"""링크 세션 호출 결과 값 객체."""

from dataclasses import dataclass

from robot_drawer.domain.enums import LinkErrorKind


@dataclass(frozen=True)
class LinkResult:
    """connect() 결과.

    Args:
        ok: 성공 여부.
        error: 실패 유형. 성공이면 None.
        message: 사용자에게 보여줄 상태 메시지.
    """

    ok: bool
    error: LinkErrorKind | None = None
    message: str = ''

    @classmethod
    def success(cls, message: str = 'Connected') -> 'LinkResult':
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, error: LinkErrorKind, message: str) -> 'LinkResult':
        return cls(ok=False, error=error, message=message)


@dataclass(frozen=True)
class TransmissionResult:
    """send() 결과.

    실패 시에도 전달된 청크 수를 담아 부분 진행률을 보고한다.

    Args:
        ok: 모든 청크 전달 여부.
        delivered: 응답(ack)까지 완료된 청크 수.
        total: 전송 대상 청크 수.
        error: 실패 유형. 성공이면 None.
        message: 사용자에게 보여줄 상태 메시지.
    """

    ok: bool
    delivered: int
    total: int
    error: LinkErrorKind | None = None
    message: str = ''
