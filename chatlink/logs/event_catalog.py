"""Human-readable templates for chatlink's log events.

``event_templates.json`` maps a domain (``app``, ``transport``, ``session``)
to its actions, each with a ``str.format`` template whose placeholders are
filled from the keyword arguments given to ``ChatLogger.log_event``.
"""

from __future__ import annotations

import json
import string
from collections.abc import Iterable, Mapping
from pathlib import Path

DOMAINS = ("app", "transport", "session")
TEMPLATES_PATH = Path(__file__).with_name("event_templates.json")

EventKey = tuple[str, str]


class EventCatalog:
    """Lookup and rendering for ``(domain, action)`` event templates.

    A catalog that failed to load is empty and keeps the reason in
    ``load_error``; every event then logs its derived ``domain: action`` text.
    """

    def __init__(
        self, templates: Mapping[EventKey, str], load_error: str | None = None
    ) -> None:
        self._templates = dict(templates)
        self.load_error = load_error

    @classmethod
    def from_file(cls, path: Path = TEMPLATES_PATH) -> EventCatalog:
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            return cls(_flatten(raw))
        except FileNotFoundError:
            return cls({}, load_error=f"Event templates file missing: {path.name}")
        except (OSError, ValueError) as e:
            return cls({}, load_error=f"Failed to load event templates: {e}"[:200])

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def keys(self) -> set[EventKey]:
        return set(self._templates)

    def template(self, domain: str, action: str) -> str | None:
        return self._templates.get((domain, action))

    def placeholders(self, domain: str, action: str) -> set[str]:
        template = self.template(domain, action) or ""
        return {
            field for _, field, _, _ in string.Formatter().parse(template) if field
        }

    def render(
        self, domain: str, action: str, fields: Mapping[str, object]
    ) -> str | None:
        """Fill the event's template, or return None for an unknown event.

        A template whose placeholders are not all supplied is returned as-is.
        """
        template = self.template(domain, action)
        if template is None:
            return None
        try:
            return template.format(**fields)
        except (KeyError, IndexError, ValueError):
            return template

    def missing(self, events: Iterable[EventKey]) -> list[EventKey]:
        return sorted(set(events) - set(self._templates))


def _flatten(raw: object) -> dict[EventKey, str]:
    if not isinstance(raw, Mapping):
        raise ValueError("top level must be an object of domains")
    unknown = sorted(set(raw) - set(DOMAINS))
    if unknown:
        raise ValueError(f"unknown event domains: {', '.join(map(str, unknown))}")
    templates: dict[EventKey, str] = {}
    for domain, actions in raw.items():
        if not isinstance(actions, Mapping):
            raise ValueError(f"domain '{domain}' must map actions to templates")
        for action, template in actions.items():
            if not isinstance(template, str):
                raise ValueError(f"template for {domain}/{action} must be a string")
            templates[(domain, action)] = template
    return templates


CATALOG = EventCatalog.from_file()


def reload_catalog(path: Path = TEMPLATES_PATH) -> EventCatalog:
    global CATALOG  # noqa: PLW0603
    CATALOG = EventCatalog.from_file(path)
    return CATALOG


__all__ = ["CATALOG", "DOMAINS", "EventCatalog", "reload_catalog"]
