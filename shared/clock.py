"""Clock helpers.

All timestamps in the system are timezone-aware UTC datetimes.
"""

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def from_epoch_millis(value: int) -> datetime:
    """Convert a Unix timestamp in milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
