"""페이로드 프레이밍 포트 인터페이스.

명령 목록의 직렬화와 링크 크기 청크 분할을 추상화한다.
infra/transport/ 레이어에서 구현한다.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from robot_drawer.domain.entities.command import CommandList
from robot_drawer.domain.value_objects.chunk import Chunk


class PayloadFramer(ABC):
    """명령 목록 → 전송 청크 변환 인터페이스."""

    @abstractmethod
    def frame(self, command_lists: Sequence[CommandList]) -> list[Chunk]:
        """스트로크별 명령 목록을 전송 청크로 변환한다.

        Args:
            command_lists: 스트로크 순서의 명령 목록들.

        Returns:
            전송 순서의 청크 목록.
        """
