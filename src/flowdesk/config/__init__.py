"""Configuration for flowdesk."""

from .settings import Settings

__all__ = ["Settings"]
