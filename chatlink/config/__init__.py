"""Configuration models for chatlink."""

from .model import ClientSettings, Credentials, Endpoint  # noqa: F401

__all__ = ["ClientSettings", "Credentials", "Endpoint"]
