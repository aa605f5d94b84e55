"""
Display helpers for epoch timestamps and flags.

No resource is legitimately timestamped at epoch zero, so a zero, negative
or missing value renders as an empty cell meaning "unset".
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional


logger = logging.getLogger(__name__)


RFC3339_UTC_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_epoch_seconds(value: int) -> str:
    """
    Render epoch seconds as an RFC 3339 UTC timestamp.

    Values beyond year 9999 (e.g. milliseconds sent as seconds) cannot be
    represented by datetime and render as the raw number instead.

    Args:
        value: Seconds since the Unix epoch

    Returns:
        Timestamp such as "2024-05-01T12:00:00Z", or "" when value <= 0
    """
    if value <= 0:
        return ""
    try:
        return (EPOCH + timedelta(seconds=value)).strftime(RFC3339_UTC_FORMAT)
    except OverflowError:
        logger.debug(f"Epoch value {value} is out of datetime range")
        return str(value)


def format_epoch_seconds_optional(value: Optional[int]) -> str:
    """Like format_epoch_seconds, but an absent or null value renders as ""."""
    if value is None:
        return ""
    return format_epoch_seconds(value)


def format_bool(value: Optional[bool]) -> str:
    return "true" if value else "false"
