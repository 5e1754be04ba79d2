#!/usr/bin/env python3
"""
Command line entry point: connect, join the configured channels and log chat.
"""

from __future__ import annotations

import asyncio
import logging
import sys

from pydantic import ValidationError

from .config.model import ClientSettings
from .errors.internal import ConfigurationError
from .irc.client import IRCClient
from .irc.parser import IRCMessage
from .irc.transport import Socket
from .logs.logger import logger


class ConsoleListener:
    """Session listener that joins channels on welcome and logs traffic."""

    def __init__(self, client: IRCClient, channels: list[str]) -> None:
        self.client = client
        self.channels = channels
        self.closed = asyncio.Event()

    def on_handshake_completed(self) -> None:
        logger.log_event("app", "handshake_completed", user=self.client.nickname)
        for channel in self.channels:
            self.client.join(channel)

    def on_channel_joined(self) -> None:
        pass

    def on_message_received(self, message: IRCMessage) -> None:
        if message.command == "PRIVMSG":
            channel, _, text = message.parameters.partition(" :")
            logger.log_event(
                "app",
                "chat_message",
                user=self.client.nickname,
                channel=channel,
                author=message.nickname or "?",
                text=text,
            )
            return
        logger.log_event(
            "app",
            "server_message",
            level=logging.DEBUG,
            user=self.client.nickname,
            command=message.command,
            parameters=message.parameters,
        )

    def on_session_closed(self) -> None:
        self.closed.set()


def build_client(settings: ClientSettings) -> tuple[IRCClient, ConsoleListener]:
    endpoint = settings.endpoint()
    socket = Socket(
        endpoint.host,
        endpoint.port,
        read_size=settings.read_size,
        encoding=settings.encoding,
        connect_timeout=settings.connect_timeout,
    )
    client = IRCClient(socket)
    listener = ConsoleListener(client, settings.channels)
    client.listener = listener
    return client, listener


def require_login(settings: ClientSettings) -> None:
    if not settings.nickname or not settings.auth_token:
        raise ConfigurationError(
            "CHATLINK_NICK and CHATLINK_TOKEN must be set",
            data={"nickname": bool(settings.nickname)},
        )


async def main(settings: ClientSettings | None = None) -> None:
    """Run one chat session until the server closes it.

    Args:
        settings: Settings to use; read from the environment when omitted.

    Raises:
        ConfigurationError: If nickname or token are missing.
    """
    settings = settings or ClientSettings.from_env()
    require_login(settings)
    client, listener = build_client(settings)
    credentials = settings.credentials()
    logger.log_event("app", "start", host=settings.host, port=settings.port)
    client.register(
        credentials.nickname,
        credentials.user,
        credentials.real_name,
        credentials.auth_token,
    )
    try:
        await listener.closed.wait()
    finally:
        client.close()
        logger.log_event("app", "shutdown")


def check_config() -> int:
    logger.log_event("app", "config_check")
    try:
        settings = ClientSettings.from_env()
        require_login(settings)
    except (ValidationError, ConfigurationError) as e:
        logger.log_event("app", "config_invalid", level=logging.ERROR, error=str(e))
        return 1
    logger.log_event(
        "app",
        "config_valid",
        host=settings.host,
        port=settings.port,
        channels=len(settings.channels),
    )
    return 0


def run(argv: list[str] | None = None) -> None:
    """Synchronous entry point for the console script."""
    args = sys.argv[1:] if argv is None else argv
    if "--check-config" in args:
        sys.exit(check_config())
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.log_event("app", "interrupted", level=logging.WARNING)
        sys.exit(0)
    except (ValidationError, ConfigurationError) as e:
        logger.log_event("app", "config_invalid", level=logging.ERROR, error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    run()
