"""chatlink: a small event-driven Twitch/IRC chat client."""

from .irc import IRCClient, IRCMessage, SessionState, Socket, parse_irc_message

__version__ = "0.1.0"

__all__ = [
    "IRCClient",
    "IRCMessage",
    "SessionState",
    "Socket",
    "parse_irc_message",
    "__version__",
]
