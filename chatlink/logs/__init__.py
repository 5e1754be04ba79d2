"""Project logging package.

Contains internal logging utilities (event catalog + ChatLogger). Avoid
importing stdlib logging through this package name externally.
"""

from .event_catalog import CATALOG, EventCatalog, reload_catalog  # noqa: F401
from .logger import ChatLogger, logger  # noqa: F401

__all__ = ["ChatLogger", "logger", "CATALOG", "EventCatalog", "reload_catalog"]
