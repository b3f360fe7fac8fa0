"""
Telnet-side connections to the proxied MUCK.

This package provides:
- BackendChannel Protocol for byte-stream backends
- StreamBackendChannel over asyncio TCP streams
- dial_backend factory used by the endpoint pair
- FakeBackendChannel for testing
"""

from .fake import FakeBackendChannel
from .protocol import BackendChannel
from .stream import StreamBackendChannel, dial_backend

__all__ = [
    # Protocol
    "BackendChannel",
    # Backends
    "StreamBackendChannel",
    "FakeBackendChannel",
    # Factory
    "dial_backend",
]
