"""FastAPI application exposing the MUCK proxy at ``/``."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, WebSocket
from fastapi.responses import PlainTextResponse

from . import __version__
from .config import Config, load_config
from .logging_setup import setup_logging_from_env
from .websocket import Dialer, handle_proxy_session

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging_from_env()

    config: Config = app.state.config
    logger.info(
        "muckbridge listening on %s, proxying to %s (gbk=%s)",
        config.server.listen,
        config.backend.address,
        config.backend.use_gbk,
    )

    yield

    logger.info("muckbridge stopped")


def create_app(config: Config | None = None, dialer: Dialer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application configuration. If None, loads it from the environment.
        dialer: Backend dialer override. If None, dials the MUCK over TCP.
    """
    app = FastAPI(
        title="muckbridge",
        description="WebSocket to telnet proxy for MUCK servers",
        version=__version__,
        lifespan=lifespan,
    )

    # Wire dependencies explicitly and store in app.state
    app.state.config = config or load_config()
    app.state.dialer = dialer

    @app.get("/")
    async def not_an_upgrade(request: Request) -> PlainTextResponse:
        """Plain GET on the proxy endpoint: the upgrade cannot happen."""
        logger.error(
            "upgrade: request from %s is not a websocket upgrade",
            getattr(request.client, "host", None),
        )
        return PlainTextResponse("Error creating websocket", status_code=500)

    @app.websocket("/")
    async def proxy(websocket: WebSocket) -> None:
        """Proxy the WebSocket connection to the MUCK."""
        await handle_proxy_session(
            websocket,
            app.state.config,
            dialer=app.state.dialer,
        )

    return app


# Create the app instance
app = create_app()
