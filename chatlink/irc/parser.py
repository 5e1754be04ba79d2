"""IRC message parsing utilities (packaged)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class IRCMessage:
    """One inbound protocol line split into its leading parts.

    ``prefix`` and ``tag_payload`` keep their leading ``:`` / ``@``.
    ``parameters`` is the verbatim remainder of the line.
    """

    command: str
    parameters: str
    prefix: str | None = None
    tag_payload: str | None = None
    raw: str = ""

    @property
    def nickname(self) -> str | None:
        """Nick portion of a ``:nick!user@host`` prefix."""
        if not self.prefix:
            return None
        return self.prefix.lstrip(":").split("!", 1)[0] or None

    @property
    def tags(self) -> dict[str, str]:
        return parse_tags(self.tag_payload)


def _split_token(line: str) -> tuple[str, str] | None:
    token, sep, rest = line.partition(" ")
    if not sep:
        return None
    return token, rest


def parse_irc_message(raw_line: str) -> IRCMessage:
    tag_payload: str | None = None
    prefix: str | None = None
    line = raw_line

    if line.startswith("@"):
        split = _split_token(line)
        if split:
            tag_payload, line = split

    if line.startswith(":"):
        split = _split_token(line)
        if split:
            prefix, line = split

    split = _split_token(line)
    if split is None:
        # Permissive: no separator left, forward with empty command/params
        command, parameters = "", ""
    else:
        command, parameters = split

    return IRCMessage(
        command=command,
        parameters=parameters,
        prefix=prefix,
        tag_payload=tag_payload,
        raw=raw_line,
    )


def parse_tags(tag_payload: str | None) -> dict[str, str]:
    """Decode an ``@key=value;key2=value2`` payload into a dict."""
    tags: dict[str, str] = {}
    if not tag_payload:
        return tags
    for tag in tag_payload.lstrip("@").split(";"):
        if not tag:
            continue
        k, _, v = tag.partition("=")
        tags[k] = v
    return tags
