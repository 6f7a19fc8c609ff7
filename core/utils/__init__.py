"""
Core Utilities Package

Modules:
    - time: Conversions between exchange timestamps and UTC datetimes
"""

from core.utils.time import to_utc_datetime, datetime_to_timestamp, current_utc_datetime

__all__ = ["to_utc_datetime", "datetime_to_timestamp", "current_utc_datetime"]
