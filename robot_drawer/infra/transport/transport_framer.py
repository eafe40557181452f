"""전송 프레이머 (PayloadFramer 구현체).

직렬화된 페이로드를 링크의 쓰기 크기 제한에 맞는 청크로 나누고
base64로 인코딩한다. 종료 문자는 붙이지 않으며, 수신 측은
받은 순서대로 청크를 이어 붙여 원래 페이로드를 복원한다.
청크별 체크섬이 없으므로 순서가 바뀌거나 빠지면 페이로드가 깨진다.
"""

from __future__ import annotations

import base64
from collections.abc import Iterable, Sequence
import logging

from robot_drawer.domain.entities.command import CommandList
from robot_drawer.domain.value_objects.chunk import Chunk
from robot_drawer.infra.transport.command_serializer import (
    deserialize_command_lists,
    serialize_command_lists,
)
from robot_drawer.usecase.ports.payload_framer import PayloadFramer

logger = logging.getLogger(__name__)

# GATT 쓰기 페이로드 상한보다 작게 유지한다
DEFAULT_CHUNK_SIZE = 180


class TransportFramer(PayloadFramer):
    """명령 목록 → base64 청크 변환기.

    Args:
        chunk_size: 인코딩 전 청크 최대 문자 수.
    """

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError(f'chunk_size must be positive: {chunk_size}')
        self._chunk_size = chunk_size

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def frame(self, command_lists: Sequence[CommandList]) -> list[Chunk]:
        """스트로크별 명령 목록을 전송 청크로 변환한다."""
        payload = serialize_command_lists(command_lists)
        chunks = self.encode(payload)
        logger.debug(
            'Framed %d chars into %d chunks', len(payload), len(chunks)
        )
        return chunks

    def split_payload(self, payload: str) -> list[str]:
        """페이로드를 chunk_size 이하의 조각으로 나눈다."""
        size = self._chunk_size
        return [payload[i:i + size] for i in range(0, len(payload), size)]

    def encode(self, payload: str) -> list[Chunk]:
        """페이로드를 나누어 base64 청크로 인코딩한다."""
        return [
            Chunk(
                index=i,
                data=base64.b64encode(piece.encode('utf-8')).decode('ascii'),
            )
            for i, piece in enumerate(self.split_payload(payload))
        ]


def reassemble(chunks: Iterable[Chunk]) -> str:
    """전송 순서의 청크를 이어 붙여 원래 페이로드를 복원한다."""
    return b''.join(c.to_bytes() for c in chunks).decode('utf-8')


def unframe(chunks: Iterable[Chunk]) -> list[CommandList]:
    """청크를 복원하여 스트로크별 명령 목록으로 역직렬화한다.

    Raises:
        PayloadFormatError: 복원된 페이로드 형식이 맞지 않을 때.
    """
    return deserialize_command_lists(reassemble(chunks))
