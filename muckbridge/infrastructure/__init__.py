"""Infrastructure utilities for muckbridge."""

from .network import get_local_ip, is_port_available

__all__ = [
    "get_local_ip",
    "is_port_available",
]
