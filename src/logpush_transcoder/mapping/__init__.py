"""Internal mapping subpackage for record-to-message transformation.

All functions in this package are pure apart from reading the wall clock for
the now-timestamp path. The public API lives in ``logpush_transcoder.transcoder``.

Modules:
    orchestrator: Builds a NormalizedMessage from a parsed record
    field_rules: Role classification and per-field transformation rules
    summary: Human-readable summary line construction
    time_utils: Timestamp encoding detection and conversion
"""
from __future__ import annotations

from . import field_rules as field_rules  # noqa: F401
from . import summary as summary  # noqa: F401
from . import time_utils as time_utils  # noqa: F401

__all__ = ["field_rules", "summary", "time_utils"]
