"""Command line argument parsing."""

import argparse

from muckbridge import __version__
from muckbridge.config import DEFAULT_LISTEN, DEFAULT_MUCK


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments namespace with:
        - addr: HTTP listen address, or None for the configured default
        - muck: MUCK host and port, or None for the configured default
        - gbk: True if the MUCK speaks GBK, None if not given
        - verbose: Whether to log at debug level
    """
    parser = argparse.ArgumentParser(
        prog="muckbridge",
        description="muckbridge - WebSocket to telnet proxy for MUCK servers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--addr",
        "-addr",
        metavar="HOST:PORT",
        default=None,
        help=f"HTTP service address (default: {DEFAULT_LISTEN})",
    )
    parser.add_argument(
        "--muck",
        "-muck",
        metavar="HOST:PORT",
        default=None,
        help=f"Host and port of the proxied MUCK (default: {DEFAULT_MUCK})",
    )
    parser.add_argument(
        "--gbk",
        "-gbk",
        action="store_true",
        default=None,
        help="The MUCK charset is GBK",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logs",
    )

    return parser.parse_args(argv)
