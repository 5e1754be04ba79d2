"""Centralized internal error hierarchy.

These exceptions give semantic categories to the few failures chatlink
surfaces to its callers. Protocol-level oddities (malformed lines, sends on
a closed transport) are deliberately not errors; they are logged instead.

Classes:
  ChatLinkError        – Base for all internal errors.
  TransportError       – The TCP connection could not be issued or used.
  ConfigurationError   – Settings are missing or invalid for the requested action.
"""

from __future__ import annotations

from collections.abc import Mapping


class ChatLinkError(Exception):
    """Base class for all chatlink errors with metadata support.

    Attributes:
        data: Dictionary containing arbitrary structured context data.

    Args:
        message: Descriptive error message.
        data: Optional mapping of additional context data.
    """

    data: dict[str, object]

    def __init__(
        self, message: str, *, data: Mapping[str, object] | None = None
    ) -> None:
        super().__init__(message)
        # Copy into a plain dict to avoid unexpected mutations from caller.
        self.data = dict(data) if data else {}


class TransportError(ChatLinkError):
    """Raised when a connection cannot be issued on the transport.

    Typically the socket was asked to open outside of a running event loop.
    Failures of an already scheduled connect are reported to the transport
    listener instead of being raised.
    """


class ConfigurationError(ChatLinkError):
    """Raised when client settings are incomplete for the requested action."""


__all__ = [
    "ChatLinkError",
    "TransportError",
    "ConfigurationError",
]
