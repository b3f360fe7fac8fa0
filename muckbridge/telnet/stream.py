"""Backend channel over an asyncio TCP stream."""

import asyncio
import logging

from ..config import Address
from ..errors import DialError, ReadError, WriteError

logger = logging.getLogger(__name__)


class StreamBackendChannel:
    """Plain TCP connection to the MUCK, no telnet option negotiation."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        address: Address,
    ) -> None:
        self.reader = reader
        self.writer = writer
        self.address = address
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def read(self, size: int) -> bytes:
        try:
            data = await self.reader.read(size)
        except (ConnectionError, OSError) as e:
            raise ReadError(f"read from muck {self.address}: {e}") from e
        if not data:
            raise ReadError(f"muck {self.address} closed the connection")
        return data

    async def write(self, data: bytes) -> None:
        # drain() waits until the transport has taken every byte
        try:
            self.writer.write(data)
            await self.writer.drain()
        except (ConnectionError, OSError, RuntimeError) as e:
            raise WriteError(f"write to muck {self.address}: {e}") from e

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except (ConnectionError, OSError) as e:
            logger.debug("Backend close error address=%s error=%s", self.address, e)
        logger.debug("Backend connection closed address=%s", self.address)


async def dial_backend(address: Address) -> StreamBackendChannel:
    """Open a TCP connection to the MUCK.

    Raises:
        DialError: If the connection cannot be established.
    """
    try:
        reader, writer = await asyncio.open_connection(address.host, address.port)
    except OSError as e:
        raise DialError(str(address), str(e)) from e

    logger.debug(
        "Backend connected address=%s local=%s",
        address,
        writer.get_extra_info("sockname"),
    )
    return StreamBackendChannel(reader, writer, address)
