"""Summary line construction.

The summary is a display string, not round-trippable data. It looks like::

    ClientRequestHost: example.com | ClientRequestPath: /api/metrics | EdgeResponseBytes: 911
"""
from __future__ import annotations

import json
from typing import Any, Iterable

from ..models.logpush import MISSING, RawRecord

__all__ = ["build_summary", "render_value", "SUMMARY_SEPARATOR"]

SUMMARY_SEPARATOR = " | "


def render_value(value: Any) -> str:
    """Render a raw value in its native text form (strings unquoted)."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, type(None))):
        return json.dumps(value)
    if isinstance(value, (int, float)):
        return repr(value)
    return json.dumps(value, ensure_ascii=False, separators=(", ", ": "))


def build_summary(record: RawRecord, summary_fields: Iterable[str]) -> str:
    """Join ``"<name>: <value>"`` for each configured field present at the top level.

    Configured order is preserved; names missing from the record are skipped.
    """
    parts = []
    for name in summary_fields:
        value = record.get(name)
        if value is MISSING:
            continue
        parts.append(f"{name}: {render_value(value)}")
    return SUMMARY_SEPARATOR.join(parts)
