"""Chat session over a Socket: registration handshake and outbound commands."""

from __future__ import annotations

import logging

from ..config.model import Credentials
from ..constants import LINE_ENDING
from ..logs.logger import logger
from .dispatcher import IRCDispatcher
from .models import OPENABLE_STATES, SessionState
from .protocols import SessionListener
from .transport import Socket


class IRCClient:
    def __init__(self, socket: Socket, listener: SessionListener | None = None):
        self.socket = socket
        socket.listener = self
        self.listener = listener
        self.credentials: Credentials | None = None
        self.state = SessionState.UNOPENED
        self.dispatcher = IRCDispatcher(self)

    @property
    def host(self) -> str:
        return self.socket.host

    @property
    def port(self) -> int:
        return self.socket.port

    @property
    def nickname(self) -> str | None:
        return self.credentials.nickname if self.credentials else None

    @property
    def is_registered(self) -> bool:
        return self.state in (SessionState.KEEPALIVE_ACKNOWLEDGED, SessionState.READY)

    @property
    def is_ready(self) -> bool:
        return self.state is SessionState.READY

    def _set_state(self, new_state: SessionState) -> bool:
        if self.state is new_state:
            return True
        if not self.state.can_transition_to(new_state):
            logger.log_event(
                "session",
                "invalid_transition",
                level=logging.WARNING,
                user=self.nickname,
                old_state=self.state.name,
                new_state=new_state.name,
            )
            return False
        logger.log_event(
            "session",
            "state_change",
            level=logging.DEBUG,
            user=self.nickname,
            old_state=self.state.name,
            new_state=new_state.name,
        )
        self.state = new_state
        return True

    # Public interface

    def register(
        self, nickname: str, user: str, real_name: str, auth_token: str
    ) -> None:
        """Store credentials and open the connection if it is not already.

        The PASS/NICK handshake is sent once the transport reports it is
        writable. Calling this again on a live session only replaces the
        stored credentials.
        """
        self.credentials = Credentials(
            nickname=nickname, user=user, real_name=real_name, auth_token=auth_token
        )
        if self.state not in OPENABLE_STATES:
            logger.log_event(
                "session",
                "credentials_replaced",
                level=logging.DEBUG,
                user=self.nickname,
                state=self.state.name,
            )
            return
        logger.log_event(
            "session", "register", user=self.nickname, host=self.host, port=self.port
        )
        self.dispatcher.reset()
        self.socket.open()
        self._set_state(SessionState.OPENING)

    def join(self, channel: str) -> bool:
        if not channel.startswith("#"):
            logger.log_event(
                "session",
                "join_ignored",
                level=logging.DEBUG,
                user=self.nickname,
                target=channel,
            )
            return False
        return self.send_command(f"JOIN {channel}")

    def send_message_to_channel(self, text: str, channel: str) -> bool:
        if not channel.startswith("#"):
            return False
        return self.send_command(f"PRIVMSG {channel} :{text}")

    def send_message_to_nickname(self, text: str, nickname: str) -> bool:
        # Only "#"-prefixed targets are sent, same as send_message_to_channel.
        if not nickname.startswith("#"):
            return False
        return self.send_command(f"PRIVMSG {nickname} :{text}")

    def send_command(self, command: str) -> bool:
        logger.log_event(
            "session",
            "send_command",
            level=logging.DEBUG,
            user=self.nickname,
            command="PASS ***" if command.startswith("PASS ") else command,
        )
        return self.socket.send_message(f"{command}{LINE_ENDING}")

    def close(self) -> None:
        self.socket.close()

    # TransportListener

    def on_opened(self) -> None:
        logger.log_event(
            "session", "socket_opened", level=logging.DEBUG, user=self.nickname
        )

    def on_writable(self) -> None:
        if self.state is not SessionState.OPENING:
            return
        if self.credentials is None:
            logger.log_event(
                "session", "no_credentials", level=logging.WARNING, host=self.host
            )
            return
        self.send_command(f"PASS {self.credentials.password}")
        self.send_command(f"NICK {self.credentials.nickname}")
        self._set_state(SessionState.AWAITING_REGISTRATION)
        logger.log_event("session", "handshake_sent", user=self.nickname)

    def on_data_received(self, chunk: str) -> None:
        self.dispatcher.process_incoming_data(chunk)

    def on_closed(self) -> None:
        self.dispatcher.reset()
        if self.state is SessionState.CLOSED:
            return
        self._set_state(SessionState.CLOSED)
        logger.log_event("session", "closed", level=logging.WARNING, user=self.nickname)
        self._emit("on_session_closed")

    def on_transport_error(self, reason: str) -> None:
        logger.log_event(
            "session",
            "transport_error",
            level=logging.ERROR,
            user=self.nickname,
            reason=reason,
        )
        if (
            self.state is SessionState.OPENING
            and not self.socket.is_open
            and not self.socket.is_opening
        ):
            self.on_closed()

    # Dispatcher hooks

    def _handle_keepalive(self) -> None:
        if self.state is SessionState.AWAITING_REGISTRATION:
            self._set_state(SessionState.KEEPALIVE_ACKNOWLEDGED)

    def _handle_welcome(self) -> None:
        if self.state is SessionState.READY:
            logger.log_event(
                "session", "duplicate_welcome", level=logging.DEBUG, user=self.nickname
            )
            return
        if self._set_state(SessionState.READY):
            logger.log_event("session", "ready", user=self.nickname)
            self._emit("on_handshake_completed")

    def _emit(self, event: str, *args: object) -> None:
        callback = getattr(self.listener, event, None) if self.listener else None
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:  # noqa: BLE001
            logger.log_event(
                "session",
                "listener_error",
                level=logging.ERROR,
                user=self.nickname,
                event=event,
                error=str(e),
                error_type=type(e).__name__,
            )
