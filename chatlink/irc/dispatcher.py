"""Inbound line routing (packaged)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..constants import RPL_WELCOME
from ..logs.logger import logger
from .framing import LineBuffer
from .parser import parse_irc_message

if TYPE_CHECKING:  # pragma: no cover
    from .client import IRCClient


class IRCDispatcher:
    """Frames decoded chunks into lines and routes each one.

    ``PING`` lines are answered with ``PONG``, the welcome numeric completes
    the handshake, and everything else reaches the session listener as a
    parsed IRCMessage.
    """

    def __init__(self, client: IRCClient):
        self.client = client
        self.buffer = LineBuffer()
        self._generation = 0

    def process_incoming_data(self, chunk: str) -> None:
        generation = self._generation
        for line in self.buffer.feed(chunk):
            # A listener may close or re-register from inside a callback;
            # the rest of this chunk belongs to the connection that ended.
            if self._generation != generation:
                return
            self._handle_line(line)

    def reset(self) -> None:
        self._generation += 1
        self.buffer.clear()

    def _handle_line(self, line: str) -> None:
        if line.split(" ", 1)[0] == "PING":
            self._handle_ping(line)
            return

        logger.log_event(
            "session",
            "raw",
            level=logging.DEBUG,
            user=self.client.nickname,
            raw=line,
        )
        message = parse_irc_message(line)
        if message.command == RPL_WELCOME:
            self.client._handle_welcome()  # noqa: SLF001
            return
        self.client._emit("on_message_received", message)  # noqa: SLF001

    def _handle_ping(self, line: str) -> None:
        _, sep, payload = line.partition("PING :")
        if not sep:
            payload = line[len("PING") :].strip()
        self.client.send_command(f"PONG :{payload}")
        self.client._handle_keepalive()  # noqa: SLF001
        logger.log_event(
            "session",
            "pong",
            level=logging.DEBUG,
            user=self.client.nickname,
            payload=payload,
        )
