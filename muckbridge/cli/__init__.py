"""CLI utilities for muckbridge."""

from .args import parse_args
from .display import TAGLINE, display_startup_screen

__all__ = [
    "parse_args",
    "display_startup_screen",
    "TAGLINE",
]
