"""드로잉 전송 유스케이스.

드로잉을 명령으로 컴파일하고 청크로 나누어 연결된 로봇에 전송한다.
"""

from collections.abc import Sequence
import logging

from robot_drawer.domain.entities.drawing import Stroke
from robot_drawer.domain.enums import LinkErrorKind
from robot_drawer.domain.events.drawer_events import (
    TransmissionCompletedEvent,
    TransmissionFailedEvent,
)
from robot_drawer.domain.value_objects.link_result import TransmissionResult
from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.link_session import LinkSession
from robot_drawer.usecase.ports.event_publisher import EventPublisher
from robot_drawer.usecase.ports.payload_framer import PayloadFramer

logger = logging.getLogger(__name__)


class SendDrawing:
    """드로잉 전송 유스케이스.

    Args:
        session: 링크 세션.
        compiler: 드로잉 컴파일 유스케이스.
        framer: 페이로드 프레이머.
        event_publisher: 전송 결과 이벤트 발행자 (선택).
    """

    def __init__(
        self,
        session: LinkSession,
        compiler: CompileDrawing,
        framer: PayloadFramer,
        event_publisher: EventPublisher | None = None,
    ) -> None:
        self._session = session
        self._compiler = compiler
        self._framer = framer
        self._event_publisher = event_publisher

    async def execute(self, strokes: Sequence[Stroke]) -> TransmissionResult:
        """드로잉을 로봇에 전송한다.

        전송 실패는 드로잉에 영향을 주지 않으므로 재연결 후 다시 보낼 수 있다.

        Args:
            strokes: 전송할 스트로크 목록.

        Returns:
            전송 결과.
        """
        if not self._session.is_connected:
            result = TransmissionResult(
                ok=False, delivered=0, total=0,
                error=LinkErrorKind.NOT_CONNECTED,
                message='Please connect to your robot first.',
            )
            self._publish_failure(result)
            return result

        command_lists = self._compiler.execute(strokes)
        chunks = self._framer.frame(command_lists)
        logger.info(
            'Sending %d strokes as %d chunks', len(command_lists), len(chunks)
        )

        result = await self._session.send(chunks)
        if result.ok:
            if self._event_publisher is not None:
                self._event_publisher.publish(
                    TransmissionCompletedEvent(
                        stroke_count=len(command_lists),
                        chunk_count=len(chunks),
                    )
                )
        else:
            logger.error('Send failed: %s', result.message)
            self._publish_failure(result)
        return result

    def _publish_failure(self, result: TransmissionResult) -> None:
        if self._event_publisher is None:
            return
        self._event_publisher.publish(
            TransmissionFailedEvent(
                error=result.error,
                delivered=result.delivered,
                total=result.total,
                message=result.message,
            )
        )
