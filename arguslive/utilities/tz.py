"""Timezone utilities.

Schedule rules are evaluated by the ARGUS TV server in its local time, so
rule dates and times are converted from UTC to the configured local timezone
before they are sent.
"""

from datetime import UTC, datetime

from arguslive.config import get_local_timezone

__all__ = [
    "ensure_utc",
    "now_utc",
    "to_local",
]


def now_utc() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def to_local(dt: datetime) -> datetime:
    """Convert a datetime to the configured local timezone.

    Naive datetimes are assumed to be UTC (all host timestamps are UTC).
    """
    return ensure_utc(dt).astimezone(get_local_timezone())

