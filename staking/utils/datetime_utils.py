"""
Datetime utilities.

Provides timezone-aware datetime functions and the integer unix
timestamps the ledger runs on.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def utc_timestamp() -> int:
    """
    Get current UTC time as whole unix seconds.

    Returns:
        Seconds since the epoch, truncated
    """
    return int(utc_now().timestamp())


def resolve_now(now: int | None) -> int:
    """Return the injected timestamp, or the wall clock when omitted."""
    if now is None:
        return utc_timestamp()
    return now
