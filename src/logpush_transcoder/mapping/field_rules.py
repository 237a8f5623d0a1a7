"""Per-field transformation rules.

Each top-level field is assigned exactly one role, checked in this order:

    TIMESTAMP      converted in place to epoch seconds (no generic copy)
    STATUS_CODE    "<key>Class" status bucket added, then generic copy
    RESPONSE_TIME  "<key>Millis" added (nanoseconds / 1e6), then generic copy
    GENERIC        copied unchanged as a scalar

Derived fields are additive: they are emitted under their own names and never
replace the original value. Roles are resolved against a ``FieldMap`` so the
recognized names can follow the feed's schema version.

Public Functions:
    classify_field: Resolve the role of a field name
    apply_field_rules: Produce the output ``(name, value)`` pairs for one field
    status_class: Bucket a numeric HTTP status into "1xx".."5xx"
    coerce_scalar: Validate a value as bool/int/float/str
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..errors import UnsupportedFieldType
from ..models.config import FieldMap
from ..models.logpush import json_kind
from .time_utils import to_epoch_seconds

__all__ = [
    "FieldRole",
    "classify_field",
    "apply_field_rules",
    "status_class",
    "response_time_millis",
    "coerce_scalar",
]

FieldPairs = List[Tuple[str, Any]]

_STATUS_CLASSES = (
    (100, 200, "1xx"),
    (200, 300, "2xx"),
    (300, 400, "3xx"),
    (400, 500, "4xx"),
    (500, 600, "5xx"),
)

NANOS_PER_MILLI = 1_000_000


class FieldRole(str, Enum):
    TIMESTAMP = "timestamp"
    STATUS_CODE = "status_code"
    RESPONSE_TIME = "response_time"
    GENERIC = "generic"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def classify_field(key: str, field_map: FieldMap) -> FieldRole:
    """Return the role of ``key`` under ``field_map`` (first matching rule wins)."""
    if key in field_map.timestamp_fields:
        return FieldRole.TIMESTAMP
    if key in field_map.status_code_fields:
        return FieldRole.STATUS_CODE
    if field_map.response_time_field is not None and key == field_map.response_time_field:
        return FieldRole.RESPONSE_TIME
    return FieldRole.GENERIC


def status_class(value: Any) -> Optional[str]:
    """Bucket a numeric status code; None for non-numbers or values outside [100, 600)."""
    if not _is_number(value):
        return None
    for low, high, label in _STATUS_CLASSES:
        if low <= value < high:
            return label
    return None


def response_time_millis(value: Any) -> Optional[float]:
    """Convert a nanosecond response time to float milliseconds.

    Returns None for non-numbers and for integers too large for a float; the
    original value is still copied by the generic rule.
    """
    if not _is_number(value):
        return None
    try:
        return value / NANOS_PER_MILLI
    except OverflowError:
        return None


def coerce_scalar(key: str, value: Any) -> Any:
    """Return ``value`` if it is a bool, int, float or str.

    Raises:
        UnsupportedFieldType: For nested objects (or any other non-scalar).
    """
    if isinstance(value, (bool, int, float, str)):
        return value
    raise UnsupportedFieldType(key, json_kind(value), value)


def _timestamp_rule(key: str, value: Any, field_map: FieldMap) -> FieldPairs:
    return [(key, to_epoch_seconds(key, value))]


def _status_code_rule(key: str, value: Any, field_map: FieldMap) -> FieldPairs:
    pairs: FieldPairs = []
    label = status_class(value)
    if label is not None:
        pairs.append((f"{key}Class", label))
    pairs.append((key, coerce_scalar(key, value)))
    return pairs


def _response_time_rule(key: str, value: Any, field_map: FieldMap) -> FieldPairs:
    pairs: FieldPairs = []
    millis = response_time_millis(value)
    if millis is not None:
        pairs.append((f"{key}Millis", millis))
    pairs.append((key, coerce_scalar(key, value)))
    return pairs


def _generic_rule(key: str, value: Any, field_map: FieldMap) -> FieldPairs:
    return [(key, coerce_scalar(key, value))]


_RULES: Dict[FieldRole, Callable[[str, Any, FieldMap], FieldPairs]] = {
    FieldRole.TIMESTAMP: _timestamp_rule,
    FieldRole.STATUS_CODE: _status_code_rule,
    FieldRole.RESPONSE_TIME: _response_time_rule,
    FieldRole.GENERIC: _generic_rule,
}


def apply_field_rules(key: str, value: Any, field_map: FieldMap) -> FieldPairs:
    """Return the output pairs for one non-null, non-array field, derived fields first.

    Raises:
        InvalidTimestamp: A timestamp-role field holds an unsupported encoding.
        UnsupportedFieldType: The value is a nested object.
    """
    role = classify_field(key, field_map)
    return _RULES[role](key, value, field_map)
