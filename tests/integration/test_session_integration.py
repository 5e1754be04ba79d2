"""End-to-end session tests against a loopback server speaking Twitch IRC."""

from __future__ import annotations

import asyncio

import pytest
import pytest_asyncio

from chatlink.irc.client import IRCClient
from chatlink.irc.models import SessionState
from chatlink.irc.transport import Socket
from tests.fixtures.chat_server import LocalChatServer, unused_port, wait_until
from tests.fixtures.session_doubles import RecordingListener


@pytest_asyncio.fixture
async def server():
    srv = await LocalChatServer().start()
    yield srv
    await srv.stop()


async def _readline(reader: asyncio.StreamReader) -> str:
    line = await asyncio.wait_for(reader.readline(), timeout=2)
    return line.decode()


@pytest.mark.asyncio
async def test_full_registration_and_chat(server):  # type: ignore[no-untyped-def]
    listener = RecordingListener()
    client = IRCClient(Socket("127.0.0.1", server.port), listener)
    client.register("tester", "tester", "Test User", "secret")
    reader, writer = await server.next_connection()

    assert await _readline(reader) == "PASS oauth:secret\r\n"
    assert await _readline(reader) == "NICK tester\r\n"
    assert client.state is SessionState.AWAITING_REGISTRATION

    writer.write(b"PING :tmi.twitch.tv\r\n")
    assert await _readline(reader) == "PONG :tmi.twitch.tv\r\n"
    assert client.state is SessionState.KEEPALIVE_ACKNOWLEDGED

    # Welcome split mid-line across two writes
    writer.write(b":tmi.twitch.tv 001 tester :Wel")
    await writer.drain()
    await asyncio.sleep(0.02)
    writer.write(b"come, GLHF!\r\n:tmi.twitch.tv 002 tester :Your host\r\n")
    await wait_until(lambda: listener.count("message_received") == 1)
    assert listener.events == ["handshake_completed", "message_received"]
    assert client.is_ready

    client.join("#bar")
    assert await _readline(reader) == "JOIN #bar\r\n"
    client.send_message_to_channel("hi there", "#bar")
    assert await _readline(reader) == "PRIVMSG #bar :hi there\r\n"

    writer.write(b"@color=#FF0000 :foo!foo@foo PRIVMSG #bar :hello back\r\n")
    await wait_until(lambda: listener.count("message_received") == 2)
    msg = listener.messages[-1]
    assert msg.tag_payload == "@color=#FF0000"
    assert msg.prefix == ":foo!foo@foo"
    assert msg.parameters == "#bar :hello back"

    writer.close()
    await wait_until(lambda: "session_closed" in listener.events)
    assert client.state is SessionState.CLOSED
    client.close()
    assert listener.count("session_closed") == 1


@pytest.mark.asyncio
async def test_local_close_and_reregister(server):  # type: ignore[no-untyped-def]
    listener = RecordingListener()
    client = IRCClient(Socket("127.0.0.1", server.port), listener)
    client.register("tester", "tester", "Test User", "secret")
    reader, _ = await server.next_connection()
    assert await _readline(reader) == "PASS oauth:secret\r\n"

    client.close()
    client.close()
    assert listener.count("session_closed") == 1

    client.register("tester", "tester", "Test User", "secret")
    reader2, _ = await server.next_connection()
    assert await _readline(reader2) == "PASS oauth:secret\r\n"
    assert await _readline(reader2) == "NICK tester\r\n"
    client.close()


@pytest.mark.asyncio
async def test_unreachable_server_closes_session():  # type: ignore[no-untyped-def]
    listener = RecordingListener()
    client = IRCClient(Socket("127.0.0.1", await unused_port()), listener)
    client.register("tester", "tester", "Test User", "secret")
    await wait_until(lambda: "session_closed" in listener.events)
    assert client.state is SessionState.CLOSED
    assert listener.events == ["session_closed"]
