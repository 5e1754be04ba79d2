"""Error types raised by chatlink."""

from .internal import ChatLinkError, ConfigurationError, TransportError  # noqa: F401

__all__ = ["ChatLinkError", "ConfigurationError", "TransportError"]
