"""Millisecond clock helpers for SessionReel."""

import time
from datetime import datetime, timedelta, timezone


def epoch_millis() -> int:
    """Return the current wall-clock time as integer milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def monotonic_millis() -> int:
    """Return a monotonic timestamp in integer milliseconds.

    Only differences between two readings are meaningful. All elapsed-time
    stamps in recordings are derived from this clock so that wall-clock
    adjustments never reorder or stretch a session.
    """
    return time.monotonic_ns() // 1_000_000


def from_epoch_millis(value: int) -> datetime:
    """Convert epoch milliseconds to a timezone-aware UTC datetime."""
    seconds, millis = divmod(value, 1000)
    return datetime.fromtimestamp(seconds, tz=timezone.utc) + timedelta(milliseconds=millis)
