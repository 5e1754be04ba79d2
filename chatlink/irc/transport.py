"""TCP transport turning an asyncio stream into listener notifications."""

from __future__ import annotations

import asyncio
import codecs
import logging

from ..config.model import Endpoint
from ..constants import (
    CHATLINK_CONNECT_TIMEOUT,
    CHATLINK_DEFAULT_ENCODING,
    CHATLINK_READ_BUFFER_SIZE,
)
from ..errors.internal import TransportError
from ..logs.logger import logger
from .protocols import TransportListener


class Socket:  # pylint: disable=too-many-instance-attributes
    """One TCP connection to a fixed endpoint, exposed as events.

    ``open()`` schedules the connect on the running event loop and returns
    immediately. Once connected the listener receives ``on_opened`` and
    ``on_writable``, then one ``on_data_received`` per read until the stream
    ends, followed by ``on_closed``.
    """

    def __init__(
        self,
        host: str,
        port: int,
        *,
        read_size: int = CHATLINK_READ_BUFFER_SIZE,
        encoding: str = CHATLINK_DEFAULT_ENCODING,
        connect_timeout: float = CHATLINK_CONNECT_TIMEOUT,
    ) -> None:
        self.endpoint = Endpoint(host=host, port=port)
        self.read_size = read_size
        self.encoding = encoding
        self.connect_timeout = connect_timeout
        self.listener: TransportListener | None = None
        self.reader: asyncio.StreamReader | None = None
        self.writer: asyncio.StreamWriter | None = None
        self._connect_task: asyncio.Task[None] | None = None
        self._read_task: asyncio.Task[None] | None = None
        self._decoder: codecs.IncrementalDecoder | None = None
        self._is_open = False

    @property
    def host(self) -> str:
        return self.endpoint.host

    @property
    def port(self) -> int:
        return self.endpoint.port

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def is_opening(self) -> bool:
        return self._connect_task is not None

    def open(self) -> None:
        if self._is_open or self._connect_task is not None:
            logger.log_event(
                "transport", "already_open", level=logging.DEBUG, host=self.host
            )
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            logger.log_event(
                "transport", "no_event_loop", level=logging.ERROR, host=self.host
            )
            raise TransportError(
                "Cannot open connection without a running event loop",
                data={"host": self.host, "port": self.port},
            ) from e
        logger.log_event(
            "transport", "connect_start", host=self.host, port=self.port
        )
        self._connect_task = loop.create_task(self._connect())

    def close(self) -> None:
        if not self._is_open and self._connect_task is None:
            logger.log_event(
                "transport", "close_not_open", level=logging.DEBUG, host=self.host
            )
            return
        self._cancel_task(self._connect_task)
        self._connect_task = None
        self._teardown()
        logger.log_event("transport", "closed", host=self.host, port=self.port)
        self._notify_closed()

    def send_message(self, message: str) -> bool:
        """Write ``message`` as-is; returns False when the write was dropped."""
        if not self._is_open or self.writer is None:
            logger.log_event(
                "transport", "send_dropped", level=logging.DEBUG, host=self.host
            )
            return False
        self.writer.write(message.encode(self.encoding))
        return True

    async def _connect(self) -> None:
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port),
                timeout=self.connect_timeout,
            )
        except TimeoutError:
            self._connect_task = None
            logger.log_event(
                "transport",
                "connect_timeout",
                level=logging.ERROR,
                host=self.host,
                timeout=self.connect_timeout,
            )
            self._notify_error(f"connect timed out after {self.connect_timeout}s")
            return
        except OSError as e:
            self._connect_task = None
            logger.log_event(
                "transport",
                "connect_error",
                level=logging.ERROR,
                host=self.host,
                error=str(e),
            )
            self._notify_error(str(e))
            return

        self._connect_task = None
        self.reader, self.writer = reader, writer
        self._decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")
        self._is_open = True
        logger.log_event("transport", "opened", host=self.host, port=self.port)
        if self.listener is not None:
            self.listener.on_opened()
        # The listener may have closed us from on_opened
        if not self._is_open:
            return
        self._read_task = asyncio.create_task(self._read_loop())
        if self.listener is not None:
            self.listener.on_writable()

    async def _read_loop(self) -> None:
        try:
            await self._read_until_eof()
        except OSError as e:
            logger.log_event(
                "transport",
                "read_error",
                level=logging.ERROR,
                host=self.host,
                error=str(e),
            )
            self._notify_error(str(e))
        if self._is_open:
            logger.log_event(
                "transport", "remote_closed", level=logging.WARNING, host=self.host
            )
            self._read_task = None
            self._teardown()
            self._notify_closed()

    async def _read_until_eof(self) -> None:
        while self._is_open and self.reader is not None:
            data = await self.reader.read(self.read_size)
            if not data:
                logger.log_event(
                    "transport", "end_of_stream", level=logging.DEBUG, host=self.host
                )
                # Flush incomplete trailing bytes as U+FFFD
                self._deliver(self._decode(b"", final=True))
                return
            self._deliver(self._decode(data))

    def _decode(self, data: bytes, final: bool = False) -> str:
        if self._decoder is None:
            return ""
        return self._decoder.decode(data, final)

    def _deliver(self, chunk: str) -> None:
        if chunk and self.listener is not None:
            self.listener.on_data_received(chunk)

    def _teardown(self) -> None:
        self._is_open = False
        task, self._read_task = self._read_task, None
        self._cancel_task(task)
        if self.writer is not None:
            self.writer.close()
        self.writer = None
        self.reader = None
        self._decoder = None

    @staticmethod
    def _cancel_task(task: asyncio.Task[None] | None) -> None:
        if task is None or task.done():
            return
        try:
            current = asyncio.current_task()
        except RuntimeError:
            current = None
        if task is not current:
            task.cancel()

    def _notify_closed(self) -> None:
        if self.listener is not None:
            self.listener.on_closed()

    def _notify_error(self, reason: str) -> None:
        if self.listener is not None:
            self.listener.on_transport_error(reason)
