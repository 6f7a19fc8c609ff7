"""
Time Utilities

Exchanges disagree on how they express time in their public APIs:
- Poloniex: seconds since epoch (returnChartData "date", "start", "end")
- Binance / Bybit: milliseconds since epoch (kline open time, startTime/endTime)

These helpers convert between those integers and timezone-aware UTC datetimes,
which is what the price aggregator works with.
"""

from datetime import datetime, timezone
from typing import Union


def to_utc_datetime(timestamp: Union[int, float]) -> datetime:
    """
    Convert a timestamp (seconds or milliseconds) to a UTC datetime.

    Anything above 1e12 is treated as milliseconds; current time is ~1.7e9 in
    seconds and ~1.7e12 in milliseconds.

    Raises:
        ValueError: If timestamp is negative or out of range

    Examples:
        >>> to_utc_datetime(1704110400)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
        >>> to_utc_datetime(1704110400000)
        datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    """
    if timestamp < 0:
        raise ValueError(f"Timestamp cannot be negative: {timestamp}")

    if timestamp > 1e12:
        timestamp = timestamp / 1000.0

    try:
        return datetime.fromtimestamp(timestamp, tz=timezone.utc)
    except (OSError, OverflowError, ValueError) as e:
        raise ValueError(f"Invalid timestamp: {timestamp}. Error: {e}")


def datetime_to_timestamp(dt: datetime, milliseconds: bool = False) -> int:
    """
    Convert a datetime to a Unix timestamp (naive datetimes are taken as UTC).

    Examples:
        >>> dt = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        >>> datetime_to_timestamp(dt)
        1704110400
        >>> datetime_to_timestamp(dt, milliseconds=True)
        1704110400000
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)

    timestamp = int(dt.timestamp())

    if milliseconds:
        timestamp *= 1000

    return timestamp


def current_utc_datetime() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)
