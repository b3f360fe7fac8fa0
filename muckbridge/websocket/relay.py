"""Bidirectional relay between a client channel and a backend channel."""

import asyncio
import contextlib
import logging
from collections.abc import Awaitable, Callable
from enum import Enum

from ..errors import ProxyError
from ..session import ProxySession

logger = logging.getLogger(__name__)

# Bytes requested per backend read
CHUNK_SIZE = 1024


class Direction(str, Enum):
    """Direction a pump moves data in."""

    INBOUND = "ws->muck"
    OUTBOUND = "muck->ws"

    def __str__(self) -> str:
        return self.value


class RelayState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    DRAINING = "draining"
    CLOSED = "closed"


class Relay:
    """Run the inbound and outbound pumps of a session until one stops.

    The first pump to fail fires the session's completion signal and
    cancels the other pump. ``run`` returns once both pumps have exited,
    leaving the channels open for the caller to release.
    """

    def __init__(self, session: ProxySession, chunk_size: int = CHUNK_SIZE) -> None:
        self.session = session
        self.chunk_size = chunk_size
        self._state = RelayState.IDLE
        self._tasks: dict[Direction, asyncio.Task] = {}

    @property
    def state(self) -> RelayState:
        return self._state

    async def run(self) -> None:
        """Start both pumps and wait for both of them to exit."""
        if self._state is not RelayState.IDLE:
            raise RuntimeError(f"Relay cannot start from state {self._state.value}")

        self._state = RelayState.RUNNING
        remote = self.session.remote
        self._tasks = {
            Direction.INBOUND: asyncio.create_task(
                self._pump(Direction.INBOUND, self._forward_inbound),
                name=f"pump {Direction.INBOUND} {remote}",
            ),
            Direction.OUTBOUND: asyncio.create_task(
                self._pump(Direction.OUTBOUND, self._forward_outbound()),
                name=f"pump {Direction.OUTBOUND} {remote}",
            ),
        }

        try:
            await asyncio.wait(self._tasks.values())
        finally:
            for task in self._tasks.values():
                if not task.done():
                    task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
            self._state = RelayState.CLOSED
            logger.debug(
                "Relay closed remote=%s trigger=%s",
                remote,
                self.session.done.direction,
            )

    async def _pump(
        self,
        direction: Direction,
        step: Callable[[], Awaitable[None]],
    ) -> None:
        """Repeat ``step`` until it fails, then trigger shutdown."""
        try:
            while True:
                await step()
        except asyncio.CancelledError:
            logger.debug("Pump %s cancelled remote=%s", direction, self.session.remote)
            raise
        except ProxyError as e:
            self._shutdown(direction, e)
        except Exception as e:
            logger.exception("Unexpected error in pump %s for %s", direction, self.session.remote)
            self._shutdown(direction, e)

    async def _forward_inbound(self) -> None:
        """Move one client message to the backend."""
        data = await self.session.client.receive()
        data = self.session.transcoder.to_backend_encoding(data)
        await self.session.backend.write(data)

    def _forward_outbound(self) -> Callable[[], Awaitable[None]]:
        """Build the step moving one backend chunk to the client."""
        decoder = self.session.transcoder.client_stream()

        async def step() -> None:
            data = await self.session.backend.read(self.chunk_size)
            data = decoder.feed(data)
            if data:
                await self.session.client.send_text(data)

        return step

    def _shutdown(self, direction: Direction, error: BaseException) -> None:
        """Fire the completion signal once and stop the other pump."""
        if not self.session.done.fire(direction, error):
            logger.debug(
                "Error %s for %s after shutdown by %s: %s",
                direction,
                self.session.remote,
                self.session.done.direction,
                error,
            )
            return

        logger.warning("Error %s for %s: %s", direction, self.session.remote, error)
        self._state = RelayState.DRAINING
        for other, task in self._tasks.items():
            if other is not direction and not task.done():
                task.cancel()
