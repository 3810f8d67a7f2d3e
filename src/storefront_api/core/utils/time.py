"""
Time-related utilities for the application.

Record timestamps are stored as integer epoch milliseconds (UTC), which
keeps them numeric in DynamoDB and directly usable by JavaScript clients.
Error responses carry an ISO-8601 timestamp instead.
"""

from datetime import datetime, timezone


def utc_now_iso() -> str:
    """Return current UTC time in ISO-8601 format.

    Example:
        2024-01-15T10:42:31.123456+00:00
    """
    return datetime.now(timezone.utc).isoformat()


def epoch_millis() -> int:
    """Return current UTC time as integer milliseconds since the epoch."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
