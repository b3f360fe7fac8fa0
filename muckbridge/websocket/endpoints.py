"""Acquisition and teardown of the two connections of a session."""

import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING

from ..config import Address
from ..telnet import BackendChannel, dial_backend

if TYPE_CHECKING:
    from .channel import ClientChannel

logger = logging.getLogger(__name__)

# Type alias for backend dialer function
Dialer = Callable[[Address], Awaitable[BackendChannel]]


class EndpointPair:
    """Client and backend channels of one session.

    Use as an async context manager: entering upgrades the WebSocket and
    dials the MUCK, leaving closes whatever was opened, once.
    """

    def __init__(
        self,
        client: "ClientChannel",
        address: Address,
        dialer: Dialer | None = None,
    ) -> None:
        """
        Initialize the endpoint pair.

        Args:
            client: Not-yet-accepted client channel.
            address: MUCK address to dial.
            dialer: Factory opening the backend channel. If None, uses TCP.
        """
        self.client = client
        self.address = address
        self.backend: BackendChannel | None = None
        self._dialer = dialer or dial_backend
        self._released = False

    async def acquire(self) -> tuple["ClientChannel", BackendChannel]:
        """Upgrade the client connection, then dial the backend.

        Raises:
            UpgradeError: If the upgrade fails; no dial is attempted.
            DialError: If the backend cannot be reached.
        """
        await self.client.accept()
        logger.info("Opening a proxy for '%s'", self.client.remote)

        self.backend = await self._dialer(self.address)
        return self.client, self.backend

    async def release(self) -> None:
        """Close both channels.

        A failure closing one channel does not stop the other from closing.
        """
        if self._released:
            return
        self._released = True

        channels = [("client", self.client)]
        if self.backend is not None:
            channels.append(("backend", self.backend))

        for side, channel in channels:
            try:
                await channel.close()
            except Exception as e:
                logger.warning(
                    "Error closing %s channel remote=%s error=%r",
                    side,
                    self.client.remote,
                    e,
                )

    async def __aenter__(self) -> tuple["ClientChannel", BackendChannel]:
        try:
            return await self.acquire()
        except BaseException:
            await self.release()
            raise

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.release()
