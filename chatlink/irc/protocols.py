"""Listener interfaces for the transport and the chat session.

The transport notifies exactly one TransportListener (normally the
IRCClient that owns it); the session notifies exactly one SessionListener
supplied by the hosting application.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:  # pragma: no cover
    from .parser import IRCMessage


class TransportListener(Protocol):
    """Receives byte-stream events from a Socket."""

    def on_opened(self) -> None:
        """The TCP connection has been established."""
        ...

    def on_writable(self) -> None:
        """The connection can accept writes."""
        ...

    def on_data_received(self, chunk: str) -> None:
        """A decoded chunk arrived; it need not end on a line boundary."""
        ...

    def on_closed(self) -> None:
        """The connection ended, remotely or through close()."""
        ...

    def on_transport_error(self, reason: str) -> None:
        """Connecting or reading failed."""
        ...


class SessionListener(Protocol):
    """Receives session-level events from an IRCClient."""

    def on_handshake_completed(self) -> None:
        """The server sent the welcome numeric (001)."""
        ...

    def on_channel_joined(self) -> None:
        """Reserved for join confirmations; the client never calls it."""
        ...

    def on_message_received(self, message: IRCMessage) -> None:
        """Any inbound line that is neither a PING nor the welcome numeric."""
        ...

    def on_session_closed(self) -> None:
        """The underlying connection closed or could not be opened."""
        ...
