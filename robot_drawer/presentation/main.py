"""RobotDrawer 진입점.

드로잉 파일(JSON)을 읽어 로봇 명령으로 변환하고, 로봇에 연결하여 전송한다.

드로잉 파일 형식 (캔버스 px 좌표, 스트로크별 점 목록)::

    [[[100, 400], [100, 350], [150, 350]], [[300, 300], [320, 280]]]

실행: robot_drawer -d drawing.json [-c config.yaml] [--dry-run]
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
import json
import logging
from pathlib import Path
import sys

from robot_drawer.domain.events.drawer_events import (
    DomainEvent,
    LinkStateChangedEvent,
)
from robot_drawer.domain.value_objects.point import CanvasPoint
from robot_drawer.infra.config.yaml_config_loader import YamlConfigLoader
from robot_drawer.infra.event.in_memory_event_publisher import (
    InMemoryEventPublisher,
)
from robot_drawer.infra.permission.static_permission_checker import (
    StaticPermissionChecker,
)
from robot_drawer.infra.transport.command_serializer import (
    serialize_command_lists,
)
from robot_drawer.infra.transport.transport_framer import TransportFramer
from robot_drawer.usecase.compile_drawing import CompileDrawing
from robot_drawer.usecase.drawing_board import DrawingBoard
from robot_drawer.usecase.link_session import LinkSession
from robot_drawer.usecase.ports.config_port import AppConfig
from robot_drawer.usecase.ports.link_adapter import LinkAdapter
from robot_drawer.usecase.send_drawing import SendDrawing

logger = logging.getLogger('robot_drawer')


def load_drawing(path: Path, board: DrawingBoard) -> None:
    """드로잉 파일의 스트로크를 보드에 입력한다.

    각 스트로크는 입력 수집기와 같은 순서로 begin → add → complete 된다.

    Raises:
        ValueError: 파일 형식이 잘못되었을 때.
    """
    with open(path, encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError('drawing file must contain a list of strokes')

    for stroke in data:
        points = [CanvasPoint(x=float(p[0]), y=float(p[1])) for p in stroke]
        if not points:
            continue
        board.begin_stroke(points[0])
        for point in points[1:]:
            board.add_point(point)
        board.complete_stroke()


def build_link_adapter(config: AppConfig) -> LinkAdapter:
    """설정된 백엔드의 LinkAdapter를 생성한다."""
    backend = config.link.backend
    if backend == 'ble':
        from robot_drawer.infra.ble.bleak_link_adapter import (
            BleakLinkAdapter,
        )
        return BleakLinkAdapter(
            service_uuid=config.link.service_uuid,
            characteristic_uuid=config.link.characteristic_uuid,
        )
    if backend == 'mqtt':
        from robot_drawer.infra.mqtt.mqtt_client import MqttClient
        from robot_drawer.infra.mqtt.mqtt_link_adapter import MqttLinkAdapter
        return MqttLinkAdapter(
            MqttClient(config.mqtt),
            config.mqtt.topic_prefix,
            broker_timeout_sec=config.link.connect_timeout_sec,
            publish_timeout_sec=config.link.write_timeout_sec,
        )
    raise ValueError(f'unknown link backend: {backend}')


async def _run(
    config: AppConfig,
    adapter: LinkAdapter,
    board: DrawingBoard,
    publisher: InMemoryEventPublisher,
) -> int:
    """로봇에 연결하여 드로잉을 전송한다."""
    session = LinkSession(
        adapter,
        StaticPermissionChecker(),
        config.link,
        config.transport,
        event_publisher=publisher,
    )
    send_drawing = SendDrawing(
        session,
        CompileDrawing(config.canvas, config.pipeline),
        TransportFramer(config.transport.chunk_size),
        event_publisher=publisher,
    )

    try:
        connected = await session.connect()
        if not connected.ok:
            logger.error('Connect failed: %s', connected.message)
            return 1

        result = await send_drawing.execute(board.strokes)
        logger.info(
            '%s (%d/%d chunks)',
            result.message, result.delivered, result.total,
        )
        return 0 if result.ok else 1
    finally:
        await session.disconnect()
        close = getattr(adapter, 'close', None)
        if close is not None:
            close()


def main(argv: list[str] | None = None) -> int:
    """RobotDrawer를 실행한다.

    Args:
        argv: 커맨드 라인 인자 (프로그램 이름 제외).

    Returns:
        종료 코드.
    """
    parser = argparse.ArgumentParser(
        prog='robot_drawer',
        description='Send freehand drawings to a differential-drive robot',
    )
    parser.add_argument(
        '-d', '--drawing', type=Path, required=True,
        help='Path to the drawing JSON file',
    )
    parser.add_argument(
        '-c', '--config_file', type=Path, default=None,
        help='Path to the config.yaml file',
    )
    parser.add_argument(
        '-b', '--backend', choices=('ble', 'mqtt'), default=None,
        help='Override the link backend from the config file',
    )
    parser.add_argument(
        '--dry-run', action='store_true',
        help='Print the command payload instead of sending it',
    )
    parser.add_argument(
        '-v', '--verbose', action='store_true',
        help='Enable debug logging',
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='[%(name)s] %(levelname)s: %(message)s',
    )

    config = YamlConfigLoader(args.config_file).load()
    if args.backend is not None:
        config = replace(
            config, link=replace(config.link, backend=args.backend)
        )

    publisher = InMemoryEventPublisher()
    publisher.subscribe(LinkStateChangedEvent, _print_status)
    publisher.subscribe(DomainEvent, lambda e: logger.debug('Event: %s', e))

    compiler = CompileDrawing(config.canvas, config.pipeline)
    board = DrawingBoard(config.canvas, publisher, compiler)
    try:
        load_drawing(args.drawing, board)
    except (OSError, ValueError, TypeError, IndexError) as exc:
        logger.error('Failed to load drawing %s: %s', args.drawing, exc)
        return 2

    logger.info('Loaded %d strokes from %s', len(board.drawing), args.drawing)

    if args.dry_run:
        print(serialize_command_lists(compiler.execute(board.strokes)))
        return 0

    try:
        adapter = build_link_adapter(config)
    except ValueError as exc:
        logger.error('Invalid link configuration: %s', exc)
        return 2

    try:
        return asyncio.run(_run(config, adapter, board, publisher))
    except KeyboardInterrupt:
        logger.info('Keyboard interrupt received')
        return 130


def _print_status(event: DomainEvent) -> None:
    """링크 상태를 사용자에게 표시한다."""
    if not isinstance(event, LinkStateChangedEvent):
        return
    status = event.new_state.value
    if event.reason:
        status = f'{status} ({event.reason})'
    print(f'Link status: {status}', file=sys.stderr)


if __name__ == '__main__':
    sys.exit(main())
