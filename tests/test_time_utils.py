from __future__ import annotations

from datetime import timezone

import pytest

from logpush_transcoder.errors import InvalidTimestamp
from logpush_transcoder.mapping.time_utils import (
    NANOS_THRESHOLD,
    parse_rfc3339,
    to_epoch_seconds,
)


def test_rfc3339_text_to_whole_seconds():
    assert to_epoch_seconds("t", "2019-10-07T16:00:00Z") == 1570464000


def test_rfc3339_fraction_truncated():
    assert to_epoch_seconds("t", "2019-10-07T16:00:00.999999999Z") == 1570464000
    assert to_epoch_seconds("t", "2019-10-07T16:00:00.5Z") == 1570464000


def test_rfc3339_offset_normalized_to_utc():
    assert to_epoch_seconds("t", "2019-10-07T18:00:00+02:00") == 1570464000
    assert to_epoch_seconds("t", "2019-10-07t16:00:00z") == 1570464000


def test_pre_epoch_fraction_floors():
    assert to_epoch_seconds("t", "1969-12-31T23:59:59.5Z") == -1


def test_parse_rfc3339_is_utc_aware():
    dt = parse_rfc3339("2019-10-07T16:00:00-05:00")
    assert dt.tzinfo == timezone.utc
    assert dt.hour == 21


@pytest.mark.parametrize(
    "text",
    ["2019-10-07T16:00:00", "2019-10-07", "16:00:00Z", "yesterday", "", "2019-13-07T16:00:00Z"],
)
def test_invalid_rfc3339_text_raises(text):
    with pytest.raises(InvalidTimestamp) as exc_info:
        to_epoch_seconds("EdgeStartTimestamp", text)
    assert exc_info.value.field == "EdgeStartTimestamp"
    assert exc_info.value.value == text


def test_small_integer_is_seconds():
    assert to_epoch_seconds("t", 1570464000) == 1570464000
    assert to_epoch_seconds("t", NANOS_THRESHOLD - 1) == NANOS_THRESHOLD - 1


def test_large_integer_is_nanoseconds():
    assert to_epoch_seconds("t", 1570465372184306580) == pytest.approx(1570465372.184306580)
    assert to_epoch_seconds("t", NANOS_THRESHOLD) == pytest.approx(1000.0)


@pytest.mark.parametrize("value", [True, False, 1570464000.5, None, [1570464000], {"s": 1}])
def test_other_kinds_raise(value):
    with pytest.raises(InvalidTimestamp):
        to_epoch_seconds("t", value)


@pytest.mark.parametrize("text", [" 2019-10-07T16:00:00Z", "2019-10-07T16:00:00Z\n"])
def test_surrounding_whitespace_rejected(text):
    with pytest.raises(InvalidTimestamp):
        to_epoch_seconds("t", text)


@pytest.mark.parametrize("text", ["9999-12-31T23:59:59-01:00", "0001-01-01T00:00:00+01:00"])
def test_text_outside_datetime_range_raises(text):
    with pytest.raises(InvalidTimestamp) as exc_info:
        to_epoch_seconds("EdgeStartTimestamp", text)
    assert exc_info.value.field == "EdgeStartTimestamp"
    assert exc_info.value.value == text


@pytest.mark.parametrize("value", [10**400, -(10**400)])
def test_nanoseconds_too_large_for_float_raise(value):
    with pytest.raises(InvalidTimestamp) as exc_info:
        to_epoch_seconds("EdgeEndTimestamp", value)
    assert exc_info.value.field == "EdgeEndTimestamp"
    assert exc_info.value.value == value
