from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    CHATLINK_CONNECT_TIMEOUT,
    CHATLINK_DEFAULT_ENCODING,
    CHATLINK_DEFAULT_HOST,
    CHATLINK_DEFAULT_PORT,
    CHATLINK_READ_BUFFER_SIZE,
)

_OAUTH_PREFIX = "oauth:"


def _normalize_channels(channels: list[str]) -> list[str]:
    """Trim, lowercase, de-duplicate and '#'-prefix channel names.

    Order of first appearance is kept so channels are joined in the order
    they were configured.
    """
    normalized: list[str] = []
    for ch in channels:
        if not isinstance(ch, str):
            continue
        name = ch.strip().lstrip("#").lower()
        if name:
            normalized.append(f"#{name}")
    return list(dict.fromkeys(normalized))


class Endpoint(BaseModel):
    """Remote host and port of one TCP connection."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(min_length=1)
    port: int = Field(ge=1, le=65535)


class Credentials(BaseModel):
    """Identity presented during the registration handshake.

    Attributes:
        nickname: Nick sent with ``NICK``.
        user: User name, held for the owner; not sent on the wire.
        real_name: Real name, held for the owner; not sent on the wire.
        auth_token: OAuth token sent as ``PASS oauth:<auth_token>``.
    """

    model_config = ConfigDict(frozen=True)

    nickname: str = Field(min_length=1)
    user: str = ""
    real_name: str = ""
    auth_token: str = ""

    @field_validator("auth_token", mode="before")
    @classmethod
    def strip_oauth_prefix(cls, v: Any) -> Any:
        """Drop a leading ``oauth:`` so the PASS line never doubles it."""
        if isinstance(v, str) and v.startswith(_OAUTH_PREFIX):
            return v[len(_OAUTH_PREFIX) :]
        return v

    @property
    def password(self) -> str:
        return f"{_OAUTH_PREFIX}{self.auth_token}"


class ClientSettings(BaseModel):
    """Everything needed to run one chat session from the command line."""

    host: str = Field(default=CHATLINK_DEFAULT_HOST, min_length=1)
    port: int = Field(default=CHATLINK_DEFAULT_PORT, ge=1, le=65535)
    nickname: str | None = None
    user: str | None = None
    real_name: str | None = None
    auth_token: str | None = None
    channels: list[str] = Field(default_factory=list)
    read_size: int = Field(default=CHATLINK_READ_BUFFER_SIZE, gt=0)
    connect_timeout: float = Field(default=CHATLINK_CONNECT_TIMEOUT, gt=0)
    encoding: str = CHATLINK_DEFAULT_ENCODING

    @field_validator("channels", mode="before")
    @classmethod
    def validate_channels(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, list):
            raise ValueError("channels must be a list or comma separated string")
        return _normalize_channels(v)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientSettings:
        """Build settings from ``CHATLINK_*`` environment variables.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``.

        Returns:
            Validated ClientSettings; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        mapping = {
            "host": "CHATLINK_HOST",
            "port": "CHATLINK_PORT",
            "nickname": "CHATLINK_NICK",
            "user": "CHATLINK_USER",
            "real_name": "CHATLINK_REAL_NAME",
            "auth_token": "CHATLINK_TOKEN",
            "channels": "CHATLINK_CHANNELS",
        }
        data = {field: env[var] for field, var in mapping.items() if env.get(var)}
        return cls.model_validate(data)

    def endpoint(self) -> Endpoint:
        return Endpoint(host=self.host, port=self.port)

    def credentials(self) -> Credentials:
        """Return Credentials; raises ValidationError without a nickname."""
        nickname = self.nickname or ""
        return Credentials(
            nickname=nickname,
            user=self.user or nickname,
            real_name=self.real_name or nickname,
            auth_token=self.auth_token or "",
        )
