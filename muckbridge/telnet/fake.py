"""Fake backend channel for testing - no socket opened."""

import asyncio
import logging

from ..errors import ReadError, WriteError

logger = logging.getLogger(__name__)

_EOF = object()


class FakeBackendChannel:
    """Fake MUCK connection for testing.

    This channel simulates a backend stream for unit testing:
    - Records all bytes written to it
    - Allows injecting output to be read
    - Tracks close calls
    """

    def __init__(self) -> None:
        self._input_buffer: bytes = b""
        self._output_queue: asyncio.Queue = asyncio.Queue()
        self._pending: bytes = b""
        self._closed: bool = False
        self._close_count: int = 0
        self.write_error: Exception | None = None
        self.close_error: Exception | None = None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def close_count(self) -> int:
        """Number of times the connection was actually closed."""
        return self._close_count

    async def read(self, size: int) -> bytes:
        """Read from the injected output, waiting until some is available."""
        if not self._pending:
            item = await self._output_queue.get()
            if item is _EOF:
                raise ReadError("fake muck closed the connection")
            if isinstance(item, Exception):
                raise item
            self._pending = item

        data, self._pending = self._pending[:size], self._pending[size:]
        return data

    async def write(self, data: bytes) -> None:
        """Record bytes written to the fake backend."""
        if self._closed:
            raise WriteError("fake muck connection is closed")
        if self.write_error is not None:
            raise self.write_error
        self._input_buffer += data

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._close_count += 1
        logger.debug("Fake backend closed")
        if self.close_error is not None:
            raise self.close_error

    # Test helper methods

    def inject_output(self, data: bytes) -> None:
        """Test helper: queue data for the next reads."""
        self._output_queue.put_nowait(data)

    def inject_error(self, error: Exception) -> None:
        """Test helper: make a future read raise ``error``."""
        self._output_queue.put_nowait(error)

    def disconnect(self) -> None:
        """Test helper: simulate the MUCK closing the stream."""
        self._output_queue.put_nowait(_EOF)

    def get_input(self) -> bytes:
        """Test helper: get all bytes written since the last call."""
        result = self._input_buffer
        self._input_buffer = b""
        return result
