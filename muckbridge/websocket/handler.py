"""WebSocket session handler: pair the client with the MUCK and relay."""

import logging

from fastapi import WebSocket

from ..charset import Transcoder
from ..config import Config
from ..errors import DialError, UpgradeError
from ..session import ProxySession
from .channel import ClientChannel
from .endpoints import Dialer, EndpointPair
from .relay import Relay

logger = logging.getLogger(__name__)


async def handle_proxy_session(
    websocket: WebSocket,
    config: Config,
    *,
    dialer: Dialer | None = None,
) -> None:
    """Proxy one WebSocket connection to the configured MUCK.

    Returns when the session is over; both connections are closed by then.

    Args:
        websocket: Not-yet-accepted WebSocket connection.
        config: Application configuration.
        dialer: Backend dialer override (tests).
    """
    client = ClientChannel(websocket)
    await run_session(client, config, dialer=dialer)


async def run_session(
    client: ClientChannel,
    config: Config,
    *,
    dialer: Dialer | None = None,
) -> ProxySession | None:
    """Acquire both endpoints, run the relay, release the endpoints.

    Returns:
        The finished session, or None if it could not be established.
    """
    pair = EndpointPair(client, config.backend.address, dialer=dialer)

    try:
        async with pair as (_, backend):
            session = ProxySession(
                remote=client.remote,
                client=client,
                backend=backend,
                transcoder=Transcoder(enabled=config.backend.use_gbk),
            )
            logger.info("Connection open for '%s'. Proxying.", session.remote)

            await Relay(session).run()

            logger.info(
                "Proxying completed for %s duration=%.1fs trigger=%s",
                session.remote,
                session.duration,
                session.done.direction,
            )
            return session

    except UpgradeError as e:
        logger.error("upgrade: %s", e)
    except DialError as e:
        logger.error("Error opening telnet proxy for '%s': %s", client.remote, e)
    return None
