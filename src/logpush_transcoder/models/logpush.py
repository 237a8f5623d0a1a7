"""Raw Logpush record representation.

A Logpush feed delivers one JSON object per event. The set of keys varies by
feed version and job configuration, so the record is kept as a generic,
ordered mapping instead of a fixed schema. The text is parsed exactly once;
both the top-level iteration used for field copying and the full-tree lookup
used for the primary timestamp run against the same parsed tree.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Tuple

from ..errors import MalformedRecord

__all__ = ["RawRecord", "parse_record", "json_kind", "MISSING"]


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


# Distinguishes "field absent" from a field explicitly set to JSON null.
MISSING: Any = _Missing()


def json_kind(value: Any) -> str:
    """Return the JSON kind name of a parsed value (bool checked before int)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "float"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _find_value(node: Any, name: str) -> Any:
    # Depth-first in document order: a key is compared before its value is
    # descended into, and siblings are only visited after that subtree.
    if isinstance(node, (dict, MappingProxyType)):
        for key, value in node.items():
            if key == name:
                return value
            found = _find_value(value, name)
            if found is not MISSING:
                return found
    elif isinstance(node, list):
        for item in node:
            found = _find_value(item, name)
            if found is not MISSING:
                return found
    return MISSING


@dataclass(frozen=True)
class RawRecord:
    """One parsed feed event: an ordered, read-only mapping of field name to value."""

    fields: Mapping[str, Any]

    def __post_init__(self) -> None:
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def get(self, name: str, default: Any = MISSING) -> Any:
        """Return the top-level value for ``name`` (``MISSING`` when absent)."""
        return self.fields.get(name, default)

    def items(self) -> Iterator[Tuple[str, Any]]:
        """Iterate top-level ``(key, value)`` pairs in record order."""
        return iter(self.fields.items())

    def find_value(self, name: str) -> Any:
        """Return the first value stored under ``name`` anywhere in the tree.

        Returns ``MISSING`` when no key in the record (at any depth) matches.
        """
        return _find_value(self.fields, name)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if math.isinf(value):
        raise ValueError(f"number {text} is out of float range")
    return value


def parse_record(raw_text: str | bytes) -> RawRecord:
    """Parse one decompressed Logpush line into a :class:`RawRecord`.

    Raises:
        MalformedRecord: If the text is not valid JSON or its top level is
            not a JSON object.
    """
    try:
        parsed = json.loads(
            raw_text, parse_constant=_reject_constant, parse_float=_parse_finite_float
        )
    except (TypeError, ValueError) as e:
        # JSONDecodeError and UnicodeDecodeError are both ValueError subclasses.
        raise MalformedRecord(f"Record is not valid JSON: {e}", value=raw_text) from e
    if not isinstance(parsed, dict):
        raise MalformedRecord(
            f"Record must be a JSON object, got {json_kind(parsed)}",
            value=raw_text,
        )
    return RawRecord(fields=parsed)
