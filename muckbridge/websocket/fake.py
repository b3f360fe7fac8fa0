"""Fake client channel for testing - no WebSocket involved."""

import asyncio
import logging

from ..errors import ReadError, UpgradeError, WriteError

logger = logging.getLogger(__name__)

_DISCONNECT = object()


class FakeClientChannel:
    """Fake browser connection for testing.

    - Records every message sent to the client
    - Allows injecting messages to be received
    - Tracks accept/close calls
    """

    def __init__(self, remote: str = "127.0.0.1:50000") -> None:
        self.remote = remote
        self.sent: list[bytes] = []
        self._incoming: asyncio.Queue = asyncio.Queue()
        self._accepted = False
        self._closed = False
        self._close_count = 0
        self.accept_error: Exception | None = None
        self.send_error: Exception | None = None
        self.close_error: Exception | None = None

    @property
    def accepted(self) -> bool:
        return self._accepted

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def close_count(self) -> int:
        return self._close_count

    async def accept(self) -> None:
        if self.accept_error is not None:
            raise UpgradeError(f"fake upgrade failed: {self.accept_error}")
        self._accepted = True

    async def receive(self) -> bytes:
        item = await self._incoming.get()
        if item is _DISCONNECT:
            raise ReadError(f"ws({self.remote}) closed the connection")
        if isinstance(item, Exception):
            raise item
        return item

    async def send_text(self, data: bytes) -> None:
        if self._closed:
            raise WriteError(f"ws({self.remote}) is closed")
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(data)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close_count += 1
        logger.debug("Fake client closed remote=%s", self.remote)
        if self.close_error is not None:
            raise self.close_error

    # Test helper methods

    def inject_message(self, data: str | bytes) -> None:
        """Test helper: queue a message as if the browser sent it."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._incoming.put_nowait(data)

    def inject_error(self, error: Exception) -> None:
        """Test helper: make a future receive raise ``error``."""
        self._incoming.put_nowait(error)

    def disconnect(self) -> None:
        """Test helper: simulate the browser closing the WebSocket."""
        self._incoming.put_nowait(_DISCONNECT)
