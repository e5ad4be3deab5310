# minijira/core/clock.py
from datetime import UTC, datetime, timedelta


def utcnow() -> datetime:
    # SQLite drops tzinfo on the way back, so stored timestamps are naive UTC
    return datetime.now(UTC).replace(tzinfo=None)


def next_timestamp(previous: datetime | None) -> datetime:
    """Current time, nudged forward so it is strictly after ``previous``."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
