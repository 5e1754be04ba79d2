"""Line framing for decoded inbound chunks."""

from __future__ import annotations

import logging

from ..constants import CHATLINK_MAX_LINE_LENGTH
from ..logs.logger import logger


class LineBuffer:
    """Splits decoded text chunks into complete lines.

    A trailing fragment without a terminator is carried over to the next
    ``feed`` call. Lines are split on ``\\n`` with a trailing ``\\r``
    stripped, and empty lines are dropped. A fragment that grows past
    ``max_line_length`` is discarded together with the rest of its line.
    """

    def __init__(self, max_line_length: int = CHATLINK_MAX_LINE_LENGTH) -> None:
        self.max_line_length = max_line_length
        self._pending = ""
        self._discarding = False

    @property
    def pending(self) -> str:
        return self._pending

    @property
    def discarding(self) -> bool:
        return self._discarding

    def feed(self, chunk: str) -> list[str]:
        if self._discarding:
            _, newline, chunk = chunk.partition("\n")
            if not newline:
                return []
            self._discarding = False
        data = self._pending + chunk
        *complete, self._pending = data.split("\n")
        if len(self._pending) > self.max_line_length:
            logger.log_event(
                "session",
                "line_overflow",
                level=logging.WARNING,
                length=len(self._pending),
                limit=self.max_line_length,
            )
            self._pending = ""
            self._discarding = True
        lines = []
        for line in complete:
            line = line.rstrip("\r")
            if line:
                lines.append(line)
        return lines

    def clear(self) -> None:
        self._pending = ""
        self._discarding = False
