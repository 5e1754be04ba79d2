"""Test doubles for the session layer."""

from __future__ import annotations

from chatlink.irc.parser import IRCMessage
from chatlink.irc.transport import Socket


class RecordingListener:
    """Session listener that records every callback in order."""

    def __init__(self) -> None:
        self.events: list[str] = []
        self.messages: list[IRCMessage] = []

    def on_handshake_completed(self) -> None:
        self.events.append("handshake_completed")

    def on_channel_joined(self) -> None:
        self.events.append("channel_joined")

    def on_message_received(self, message: IRCMessage) -> None:
        self.events.append("message_received")
        self.messages.append(message)

    def on_session_closed(self) -> None:
        self.events.append("session_closed")

    def count(self, event: str) -> int:
        return self.events.count(event)


class FakeSocket(Socket):
    """Socket that connects instantly and captures writes instead of sending."""

    def __init__(self) -> None:
        super().__init__("irc.example.test", 6667)
        self.sent: list[str] = []
        self.open_calls = 0

    def open(self) -> None:
        self.open_calls += 1
        self._is_open = True

    def close(self) -> None:
        if not self._is_open:
            return
        self._is_open = False
        if self.listener is not None:
            self.listener.on_closed()

    def send_message(self, message: str) -> bool:
        if not self._is_open:
            return False
        self.sent.append(message)
        return True

    def establish(self) -> None:
        """Deliver the opened + writable notifications a real connect produces."""
        assert self.listener is not None
        self.listener.on_opened()
        self.listener.on_writable()

    def remote_close(self) -> None:
        self._is_open = False
        assert self.listener is not None
        self.listener.on_closed()
