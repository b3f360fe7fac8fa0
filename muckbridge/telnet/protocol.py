"""Backend channel protocol."""

from typing import Protocol


class BackendChannel(Protocol):
    """Raw byte-stream connection to the MUCK."""

    @property
    def closed(self) -> bool:
        """Whether ``close`` has been called."""
        ...

    async def read(self, size: int) -> bytes:
        """Read up to ``size`` bytes.

        Raises:
            ReadError: On failure or when the backend closed the stream.
        """
        ...

    async def write(self, data: bytes) -> None:
        """Write all of ``data``.

        Raises:
            WriteError: If the bytes cannot be delivered.
        """
        ...

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        ...
