"""Shared utilities (sanitization, timing)."""

from message_search.shared.utils.sanitization import (
    BANNED_CHARACTERS,
    is_blank_query,
    sanitize_query,
)
from message_search.shared.utils.stopwatch import Stopwatch

__all__ = ["BANNED_CHARACTERS", "Stopwatch", "is_blank_query", "sanitize_query"]
