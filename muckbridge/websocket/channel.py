"""Message-oriented channel to the browser over a WebSocket."""

import codecs
import logging

from fastapi import WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from ..errors import ReadError, UpgradeError, WriteError

logger = logging.getLogger(__name__)

NORMAL_CLOSURE = 1000


def describe_remote(websocket: WebSocket) -> str:
    """Return ``host:port`` of the peer, or ``unknown``."""
    client = websocket.client
    if client is None:
        return "unknown"
    return f"{client.host}:{client.port}"


class ClientChannel:
    """Wrap a Starlette WebSocket as a relay endpoint.

    Every received message is one relay unit. Outgoing data is sent as
    text frames; UTF-8 sequences split between chunks are completed on the
    next send and invalid sequences are replaced.
    """

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket
        self.remote = describe_remote(websocket)
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def accept(self) -> None:
        """Complete the WebSocket handshake.

        Raises:
            UpgradeError: If the handshake fails.
        """
        try:
            await self.websocket.accept()
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise UpgradeError(f"upgrade for {self.remote}: {e!r}") from e

    async def receive(self) -> bytes:
        """Receive the next message as bytes.

        Raises:
            ReadError: On failure or when the client closed the connection.
        """
        try:
            message = await self.websocket.receive()
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise ReadError(f"read from ws({self.remote}): {e!r}") from e

        if message["type"] == "websocket.disconnect":
            raise ReadError(
                f"ws({self.remote}) closed the connection code={message.get('code')}"
            )

        text = message.get("text")
        if text is not None:
            return text.encode("utf-8")
        return message.get("bytes") or b""

    async def send_text(self, data: bytes) -> None:
        """Send UTF-8 ``data`` as a text message.

        Nothing is sent while only part of a character is available.

        Raises:
            WriteError: If the message cannot be sent.
        """
        text = self._decoder.decode(data)
        if not text:
            return
        try:
            await self.websocket.send_text(text)
        except (WebSocketDisconnect, RuntimeError, OSError) as e:
            raise WriteError(f"send to ws({self.remote}): {e!r}") from e

    async def close(self) -> None:
        """Close the WebSocket unless either side already has."""
        if self._closed:
            return
        self._closed = True

        if (
            self.websocket.application_state == WebSocketState.DISCONNECTED
            or self.websocket.client_state == WebSocketState.DISCONNECTED
        ):
            logger.debug("WebSocket already closed remote=%s", self.remote)
            return

        await self.websocket.close(code=NORMAL_CLOSURE)
        logger.debug("WebSocket closed remote=%s", self.remote)
