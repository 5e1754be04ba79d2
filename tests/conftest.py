from __future__ import annotations

import pytest

from chatlink.irc.client import IRCClient
from chatlink.irc.models import SessionState
from tests.fixtures.session_doubles import FakeSocket, RecordingListener


@pytest.fixture(autouse=True)
def _concise_logging(monkeypatch):  # type: ignore[no-untyped-def]
    """Keep log format deterministic regardless of the caller's DEBUG setting."""
    monkeypatch.delenv("DEBUG", raising=False)


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def fake_socket() -> FakeSocket:
    return FakeSocket()


@pytest.fixture
def client(fake_socket: FakeSocket, listener: RecordingListener) -> IRCClient:
    return IRCClient(fake_socket, listener)


@pytest.fixture
def registered_client(client: IRCClient, fake_socket: FakeSocket) -> IRCClient:
    """Client that has sent PASS/NICK and is awaiting the server's reply."""
    client.register("tester", "tester", "Test User", "secret")
    fake_socket.establish()
    assert client.state is SessionState.AWAITING_REGISTRATION
    fake_socket.sent.clear()
    return client
