"""
muckbridge - WebSocket to telnet proxy for MUCK servers.

This package provides:
- FastAPI server with a WebSocket endpoint at /
- Per-connection relay to a MUCK over plain TCP
- Optional GBK <-> UTF-8 conversion for legacy MUCKs
"""

__version__ = "0.1.0"

import os
import sys

from rich.console import Console

from muckbridge.cli import display_startup_screen, parse_args
from muckbridge.config import load_config
from muckbridge.infrastructure import get_local_ip, is_port_available
from muckbridge.logging_setup import LOG_LEVEL_ENV, setup_logging_from_env

console = Console()


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Set log level based on verbose flag
    if args.verbose:
        os.environ[LOG_LEVEL_ENV] = "DEBUG"
    setup_logging_from_env()

    try:
        config = load_config(addr=args.addr, muck=args.muck, gbk=args.gbk)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    listen = config.server.listen
    if not is_port_available(listen.host, listen.port):
        console.print(f"[red]Error:[/red] Address already in use: {listen}")
        return 1

    local_url = None
    if listen.host == "0.0.0.0":
        local_url = f"ws://{get_local_ip()}:{listen.port}/"
    display_startup_screen(config, local_url=local_url)

    import uvicorn

    from muckbridge.app import create_app

    uvicorn.run(
        create_app(config),
        host=listen.host,
        port=listen.port,
        log_config=None,
        log_level="debug" if args.verbose else "info",
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
