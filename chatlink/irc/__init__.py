"""IRC subsystem package.

Contains the TCP transport, line framing, message parsing, inbound dispatch
and the registration session for a Twitch-style chat connection.
"""

from .client import IRCClient  # noqa: F401
from .dispatcher import IRCDispatcher  # noqa: F401
from .framing import LineBuffer  # noqa: F401
from .models import SESSION_TRANSITIONS, SessionState  # noqa: F401
from .parser import IRCMessage, parse_irc_message, parse_tags  # noqa: F401
from .protocols import SessionListener, TransportListener  # noqa: F401
from .transport import Socket  # noqa: F401

__all__ = [
    "IRCClient",
    "IRCDispatcher",
    "IRCMessage",
    "LineBuffer",
    "SESSION_TRANSITIONS",
    "SessionListener",
    "SessionState",
    "Socket",
    "TransportListener",
    "parse_irc_message",
    "parse_tags",
]
