"""
Common utilities for the tenant RBAC application
"""
from datetime import datetime, timezone


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    All timestamps are stored naive in UTC so that comparisons behave the
    same on Postgres and SQLite.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(dt_val: datetime) -> datetime:
    """
    Normalise a datetime to naive UTC.

    Args:
        dt_val: aware or naive datetime; naive values are assumed to be UTC

    Returns:
        datetime: naive datetime in UTC
    """
    if dt_val.tzinfo is None:
        return dt_val
    return dt_val.astimezone(timezone.utc).replace(tzinfo=None)
