"""Session state model (packaged)."""

from __future__ import annotations

from enum import Enum, auto


class SessionState(Enum):
    UNOPENED = auto()
    OPENING = auto()
    AWAITING_REGISTRATION = auto()
    KEEPALIVE_ACKNOWLEDGED = auto()
    READY = auto()
    CLOSED = auto()

    def can_transition_to(self, new_state: SessionState) -> bool:
        return new_state in SESSION_TRANSITIONS[self]


SESSION_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.UNOPENED: frozenset({SessionState.OPENING, SessionState.CLOSED}),
    SessionState.OPENING: frozenset(
        {SessionState.AWAITING_REGISTRATION, SessionState.CLOSED}
    ),
    SessionState.AWAITING_REGISTRATION: frozenset(
        {
            SessionState.KEEPALIVE_ACKNOWLEDGED,
            SessionState.READY,
            SessionState.CLOSED,
        }
    ),
    SessionState.KEEPALIVE_ACKNOWLEDGED: frozenset(
        {SessionState.READY, SessionState.CLOSED}
    ),
    SessionState.READY: frozenset({SessionState.CLOSED}),
    SessionState.CLOSED: frozenset({SessionState.OPENING}),
}

# States from which register() opens the transport
OPENABLE_STATES = frozenset({SessionState.UNOPENED, SessionState.CLOSED})
