"""Immutable configuration for the proxy.

The configuration is built once at startup (CLI flags, then environment,
then defaults) and handed explicitly to the app and every session.
"""

import os
from dataclasses import dataclass

DEFAULT_LISTEN = "localhost:8000"
DEFAULT_MUCK = "localhost:4021"

ENV_ADDR = "MUCKBRIDGE_ADDR"
ENV_MUCK = "MUCKBRIDGE_MUCK"
ENV_GBK = "MUCKBRIDGE_GBK"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Address:
    """A host and TCP port pair."""

    host: str
    port: int

    @classmethod
    def parse(cls, value: str) -> "Address":
        """Parse ``host:port``, ``[v6]:port`` or ``:port``.

        An empty host means all interfaces.

        Raises:
            ValueError: If the value has no valid port.
        """
        host, sep, port_str = value.strip().rpartition(":")
        if not sep:
            raise ValueError(f"Address must be host:port, got {value!r}")

        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        if not host:
            host = "0.0.0.0"

        try:
            port = int(port_str)
        except ValueError:
            raise ValueError(f"Invalid port in address {value!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"Port out of range in address {value!r}")

        return cls(host=host, port=port)

    def __str__(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


@dataclass(frozen=True)
class ServerConfig:
    """Where the HTTP/WebSocket server listens."""

    listen: Address


@dataclass(frozen=True)
class BackendConfig:
    """The proxied MUCK and its charset."""

    address: Address
    use_gbk: bool = False


@dataclass(frozen=True)
class Config:
    """Complete runtime configuration."""

    server: ServerConfig
    backend: BackendConfig


def _env_flag(name: str) -> bool | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip().lower() in _TRUE_VALUES


def load_config(
    addr: str | None = None,
    muck: str | None = None,
    gbk: bool | None = None,
) -> Config:
    """Build the configuration.

    Explicit arguments win over ``MUCKBRIDGE_*`` environment variables,
    which win over the defaults.

    Raises:
        ValueError: If an address cannot be parsed.
    """
    listen = addr or os.environ.get(ENV_ADDR) or DEFAULT_LISTEN
    backend = muck or os.environ.get(ENV_MUCK) or DEFAULT_MUCK

    use_gbk = gbk
    if use_gbk is None:
        use_gbk = _env_flag(ENV_GBK) or False

    return Config(
        server=ServerConfig(listen=Address.parse(listen)),
        backend=BackendConfig(address=Address.parse(backend), use_gbk=use_gbk),
    )
