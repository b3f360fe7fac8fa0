"""WebSocket handling for muckbridge."""

from .channel import ClientChannel, describe_remote
from .endpoints import Dialer, EndpointPair
from .fake import FakeClientChannel
from .handler import handle_proxy_session, run_session
from .relay import CHUNK_SIZE, Direction, Relay, RelayState

__all__ = [
    "handle_proxy_session",
    "run_session",
    "ClientChannel",
    "FakeClientChannel",
    "describe_remote",
    "EndpointPair",
    "Dialer",
    "Relay",
    "RelayState",
    "Direction",
    "CHUNK_SIZE",
]
