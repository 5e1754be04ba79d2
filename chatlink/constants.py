"""
Tunable defaults for the chatlink client

Numeric settings can be overridden through an environment variable of the
same name. Overrides that are not a positive number of the right type are
reported on stderr and the built-in default is used.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from typing import TypeVar

N = TypeVar("N", int, float)


def _rejected(name: str, raw: str, default: N, kind: str) -> N:
    print(
        f"chatlink: ignoring {name}={raw!r}, expected a positive {kind}; "
        f"using {default}",
        file=sys.stderr,
    )
    return default


def _positive_override(name: str, default: N, parse: Callable[[str], N]) -> N:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = parse(raw)
    except ValueError:
        return _rejected(name, raw, default, parse.__name__)
    if not value > 0:
        return _rejected(name, raw, default, parse.__name__)
    return value


# Wire framing
LINE_ENDING = "\r\n"

# Default endpoint (plain-text Twitch chat)
CHATLINK_DEFAULT_HOST = os.getenv("CHATLINK_DEFAULT_HOST", "irc.chat.twitch.tv")
CHATLINK_DEFAULT_PORT = _positive_override("CHATLINK_DEFAULT_PORT", 6667, int)

# Transport tuning
CHATLINK_READ_BUFFER_SIZE = _positive_override("CHATLINK_READ_BUFFER_SIZE", 1024, int)
CHATLINK_CONNECT_TIMEOUT = _positive_override("CHATLINK_CONNECT_TIMEOUT", 10.0, float)
CHATLINK_DEFAULT_ENCODING = "utf-8"

# Upper bound for a partial line held between reads (decoded characters)
CHATLINK_MAX_LINE_LENGTH = _positive_override(
    "CHATLINK_MAX_LINE_LENGTH", 64 * 1024, int
)

# Numeric reply signalling the server accepted our registration
RPL_WELCOME = "001"
