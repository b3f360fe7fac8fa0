"""Unit tests for endpoint acquisition, release and the session handler."""

from __future__ import annotations

import asyncio
import logging

import pytest

from muckbridge.config import Address, load_config
from muckbridge.errors import DialError, UpgradeError
from muckbridge.telnet import FakeBackendChannel
from muckbridge.websocket import EndpointPair, FakeClientChannel, run_session

MUCK = Address("localhost", 4021)


class _Dialer:
    """Hand out a fake backend, or fail, and count calls."""

    def __init__(self, backend: FakeBackendChannel | None = None) -> None:
        self.backend = backend
        self.calls: list[Address] = []

    async def __call__(self, address: Address) -> FakeBackendChannel:
        self.calls.append(address)
        if self.backend is None:
            raise DialError(str(address), "connection refused")
        return self.backend


def test_acquire_returns_both_channels_and_release_closes_them() -> None:
    async def _scenario() -> tuple[FakeClientChannel, FakeBackendChannel, _Dialer]:
        client, backend = FakeClientChannel(), FakeBackendChannel()
        dialer = _Dialer(backend)

        async with EndpointPair(client, MUCK, dialer=dialer) as (ws, muck):
            assert ws is client
            assert muck is backend
            assert client.accepted
        return client, backend, dialer

    client, backend, dialer = asyncio.run(_scenario())

    assert dialer.calls == [MUCK]
    assert client.close_count == 1
    assert backend.close_count == 1


def test_upgrade_failure_skips_dial() -> None:
    async def _scenario() -> tuple[FakeClientChannel, _Dialer]:
        client = FakeClientChannel()
        client.accept_error = OSError("handshake reset")
        dialer = _Dialer(FakeBackendChannel())

        with pytest.raises(UpgradeError):
            async with EndpointPair(client, MUCK, dialer=dialer):
                pass
        return client, dialer

    client, dialer = asyncio.run(_scenario())

    assert dialer.calls == []
    assert client.close_count == 1


def test_dial_failure_closes_upgraded_client() -> None:
    async def _scenario() -> FakeClientChannel:
        client = FakeClientChannel()

        with pytest.raises(DialError):
            async with EndpointPair(client, MUCK, dialer=_Dialer()):
                pass
        return client

    client = asyncio.run(_scenario())

    assert client.accepted
    assert client.close_count == 1


def test_release_is_idempotent() -> None:
    async def _scenario() -> tuple[FakeClientChannel, FakeBackendChannel]:
        client, backend = FakeClientChannel(), FakeBackendChannel()
        pair = EndpointPair(client, MUCK, dialer=_Dialer(backend))
        await pair.acquire()

        await pair.release()
        await pair.release()
        return client, backend

    client, backend = asyncio.run(_scenario())

    assert client.close_count == 1
    assert backend.close_count == 1


def test_close_failure_on_client_still_closes_backend(caplog: pytest.LogCaptureFixture) -> None:
    async def _scenario() -> tuple[FakeClientChannel, FakeBackendChannel]:
        client, backend = FakeClientChannel(), FakeBackendChannel()
        client.close_error = RuntimeError("already closing")

        async with EndpointPair(client, MUCK, dialer=_Dialer(backend)):
            pass
        return client, backend

    with caplog.at_level(logging.WARNING, logger="muckbridge"):
        client, backend = asyncio.run(_scenario())

    assert client.close_count == 1
    assert backend.close_count == 1
    assert "Error closing client channel" in caplog.text


def test_run_session_relays_then_releases() -> None:
    async def _scenario() -> tuple[FakeClientChannel, FakeBackendChannel, object]:
        client, backend = FakeClientChannel(), FakeBackendChannel()
        client.inject_message("look\n")
        client.disconnect()

        session = await asyncio.wait_for(
            run_session(client, load_config(), dialer=_Dialer(backend)),
            timeout=5,
        )
        return client, backend, session

    client, backend, session = asyncio.run(_scenario())

    assert session is not None
    assert backend.get_input() == b"look\n"
    assert client.close_count == 1
    assert backend.close_count == 1


def test_run_session_logs_dial_failure(caplog: pytest.LogCaptureFixture) -> None:
    async def _scenario() -> tuple[FakeClientChannel, object]:
        client = FakeClientChannel()
        session = await run_session(client, load_config(), dialer=_Dialer())
        return client, session

    with caplog.at_level(logging.INFO, logger="muckbridge"):
        client, session = asyncio.run(_scenario())

    assert session is None
    assert client.close_count == 1
    assert "Error opening telnet proxy" in caplog.text


def test_run_session_logs_upgrade_failure(caplog: pytest.LogCaptureFixture) -> None:
    async def _scenario() -> tuple[_Dialer, object]:
        client = FakeClientChannel()
        client.accept_error = OSError("reset")
        dialer = _Dialer(FakeBackendChannel())
        session = await run_session(client, load_config(), dialer=dialer)
        return dialer, session

    with caplog.at_level(logging.INFO, logger="muckbridge"):
        dialer, session = asyncio.run(_scenario())

    assert session is None
    assert dialer.calls == []
    assert "upgrade:" in caplog.text
