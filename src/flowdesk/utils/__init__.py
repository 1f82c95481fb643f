"""Utility functions."""

from .datetime import floor_seconds, from_iso, now_utc, to_iso
from .duration import format_duration, format_elapsed

__all__ = [
    "floor_seconds",
    "format_duration",
    "format_elapsed",
    "from_iso",
    "now_utc",
    "to_iso",
]
