"""Error types raised while bridging a WebSocket client to the MUCK."""


class ProxyError(Exception):
    """Base class for every error that ends a proxy session."""


class UpgradeError(ProxyError):
    """The WebSocket upgrade could not be completed."""


class DialError(ProxyError):
    """The telnet backend could not be reached."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"dial {address}: {reason}")
        self.address = address
        self.reason = reason


class PumpError(ProxyError):
    """I/O failure on one side of a running relay."""

    def __init__(self, message: str, *, direction: str | None = None) -> None:
        super().__init__(message)
        self.direction = direction


class ReadError(PumpError):
    """Reading from a channel failed or the peer closed it."""


class WriteError(PumpError):
    """Writing to a channel failed."""


class TranscodeError(ProxyError):
    """A chunk is not valid in the charset it was declared to be in."""

    def __init__(self, codec: str, reason: str) -> None:
        super().__init__(f"{codec}: {reason}")
        self.codec = codec
        self.reason = reason
