"""Shared fixtures: a clean environment and a threaded stand-in MUCK."""

from __future__ import annotations

import queue
import socket
import socketserver
import threading
from collections.abc import Iterator

import pytest

from muckbridge.config import ENV_ADDR, ENV_GBK, ENV_MUCK


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (ENV_ADDR, ENV_MUCK, ENV_GBK):
        monkeypatch.delenv(name, raising=False)


class _MuckHandler(socketserver.BaseRequestHandler):
    """Send the greeting, then echo every chunk back and record it."""

    def handle(self) -> None:
        server: MuckServer = self.server  # type: ignore[assignment]
        with server.lock:
            server.connections.append(self.request)
        self.request.sendall(server.greeting)

        while True:
            try:
                data = self.request.recv(4096)
            except OSError:
                break
            if not data:
                break
            server.received.put(data)
            try:
                self.request.sendall(data)
            except OSError:
                break


class MuckServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(self, greeting: bytes) -> None:
        super().__init__(("127.0.0.1", 0), _MuckHandler)
        self.greeting = greeting
        self.received: queue.Queue[bytes] = queue.Queue()
        self.connections: list[socket.socket] = []
        self.lock = threading.Lock()

    @property
    def address(self) -> str:
        host, port = self.server_address[:2]
        return f"{host}:{port}"

    def drop(self, index: int) -> None:
        """Close one accepted connection from the MUCK side."""
        with self.lock:
            conn = self.connections[index]
        conn.shutdown(socket.SHUT_RDWR)
        conn.close()


def _serve(greeting: bytes) -> Iterator[MuckServer]:
    server = MuckServer(greeting)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def muck_server() -> Iterator[MuckServer]:
    yield from _serve(b"Welcome to the MUCK\r\n")


@pytest.fixture
def gbk_muck_server() -> Iterator[MuckServer]:
    yield from _serve("欢迎光临\r\n".encode("gbk"))


@pytest.fixture
def unused_address() -> str:
    """An address nothing listens on."""
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        port = s.getsockname()[1]
    return f"127.0.0.1:{port}"
