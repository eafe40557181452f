"""링크 전송 단위 값 객체."""

import base64
from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """직렬화 페이로드의 한 조각.

    Args:
        index: 전송 순서 (0부터).
        data: base64 인코딩된 페이로드 조각.
    """

    index: int
    data: str

    def to_bytes(self) -> bytes:
        """무선으로 실제 전달되는 원본 바이트를 반환한다."""
        return base64.b64decode(self.data)

    def to_text(self) -> str:
        """인코딩 전 페이로드 문자열 조각을 반환한다."""
        return self.to_bytes().decode('utf-8')
