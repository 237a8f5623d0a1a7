"""Timestamp conversion for Logpush timestamp fields.

Logpush jobs can be configured to emit timestamps in one of three encodings.
The encoding is detected from the JSON kind of the value:

    RFC 3339 text   "2019-10-07T16:00:00Z"  -> 1570464000 (sub-second truncated)
    Unix seconds    1570464000              -> 1570464000
    Unix nanos      1570465372184306580     -> 1570465372.1843066

Conversion Heuristic:
    Integers with magnitude < 1_000_000_000_000 are treated as seconds (this
    covers dates up to the year 33658). Larger integers are nanoseconds; any
    nanosecond value after 1970-01-01T00:16:40Z is above the threshold.

Public Functions:
    to_epoch_seconds: Convert a raw timestamp value to epoch seconds
    parse_rfc3339: Parse RFC 3339 text to a timezone-aware UTC datetime
    now_epoch_seconds: Current wall-clock time in epoch seconds
"""
from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone
from typing import Any

from ..errors import InvalidTimestamp

__all__ = [
    "NANOS_THRESHOLD",
    "to_epoch_seconds",
    "parse_rfc3339",
    "now_epoch_seconds",
]

NANOS_THRESHOLD = 1_000_000_000_000
NANOS_PER_SECOND = 1_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Fraction digits are matched but discarded: only whole seconds are kept.
_RFC3339_RE = re.compile(
    r"^(?P<date>\d{4}-\d{2}-\d{2})[Tt ](?P<time>\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(text: str) -> datetime:
    """Parse RFC 3339 text into a timezone-aware UTC datetime.

    An explicit offset is mandatory and surrounding whitespace is rejected.
    Fractional seconds of any precision are accepted and dropped.

    Raises:
        ValueError: If the text is not RFC 3339.
    """
    m = _RFC3339_RE.match(text)
    if not m:
        raise ValueError("not an RFC 3339 timestamp")
    offset = m.group("offset")
    if offset in ("Z", "z"):
        offset = "+00:00"
    dt = datetime.fromisoformat(f"{m.group('date')}T{m.group('time')}{offset}")
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError("date value out of range in UTC") from e


def to_epoch_seconds(field: str, value: Any) -> float:
    """Convert a Logpush timestamp value to seconds since the epoch.

    Args:
        field: Field name, used for error reporting only.
        value: Parsed JSON value of the field.

    Returns:
        Whole seconds (as int) for text and second inputs, fractional
        seconds for nanosecond inputs.

    Raises:
        InvalidTimestamp: For booleans, floats, arrays, objects, null and
            text that is not RFC 3339, and values outside the
            representable date or float range.
    """
    if isinstance(value, bool):
        raise InvalidTimestamp(field, value, "boolean values are not timestamps")
    if isinstance(value, str):
        try:
            dt = parse_rfc3339(value)
        except ValueError as e:
            raise InvalidTimestamp(field, value, str(e)) from e
        # Floor division keeps pre-epoch values consistent with truncation to the second.
        return (dt - _EPOCH) // timedelta(seconds=1)
    if isinstance(value, int):
        if abs(value) < NANOS_THRESHOLD:
            return value
        try:
            return value / NANOS_PER_SECOND
        except OverflowError as e:
            raise InvalidTimestamp(field, value, "nanosecond value out of range") from e
    raise InvalidTimestamp(field, value)


def now_epoch_seconds() -> float:
    """Return the current wall-clock time in epoch seconds."""
    return time.time()
