"""Per-request proxy session state."""

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .charset import Transcoder

if TYPE_CHECKING:
    from .telnet import BackendChannel
    from .websocket.channel import ClientChannel


class CompletionSignal:
    """One-shot signal fired by the first pump that stops.

    Later ``fire`` calls are ignored and return False.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.direction: str | None = None
        self.error: BaseException | None = None

    def fire(self, direction: str, error: BaseException | None = None) -> bool:
        """Fire the signal. Returns True only for the first call."""
        if self._event.is_set():
            return False
        self.direction = direction
        self.error = error
        self._event.set()
        return True

    def is_set(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


@dataclass
class ProxySession:
    """One WebSocket client paired with one MUCK connection.

    Owned by the session handler; discarded once both pumps have stopped
    and both channels are closed.
    """

    remote: str
    client: "ClientChannel"
    backend: "BackendChannel"
    transcoder: Transcoder
    done: CompletionSignal = field(default_factory=CompletionSignal)
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def duration(self) -> float:
        """Seconds since the session was established."""
        return (datetime.now(UTC) - self.created_at).total_seconds()
