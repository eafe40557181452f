"""명령 직렬화 및 청크 프레이밍."""

from robot_drawer.infra.transport.transport_framer import (
    DEFAULT_CHUNK_SIZE,
    TransportFramer,
)

__all__ = ["DEFAULT_CHUNK_SIZE", "TransportFramer"]
