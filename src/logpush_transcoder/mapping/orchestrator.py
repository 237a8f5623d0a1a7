"""Central mapping pipeline from a parsed record to a NormalizedMessage.

Pipeline:
    1. Summary line from the configured summary fields
    2. Host copied from configuration
    3. Message timestamp (wall clock, or the primary timestamp field)
    4. Top-level field iteration with inclusion filter and field rules

Any error raised along the way propagates; there is no partial message.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from ..models.config import TranscoderConfig
from ..models.logpush import MISSING, RawRecord
from ..models.message import NormalizedMessage
from .field_rules import apply_field_rules
from .summary import build_summary
from .time_utils import now_epoch_seconds, to_epoch_seconds

logger = logging.getLogger(__name__)

__all__ = ["build_message", "resolve_timestamp", "collect_fields"]


def resolve_timestamp(record: RawRecord, config: TranscoderConfig) -> float:
    """Return the message timestamp in epoch seconds.

    With ``use_now_timestamp`` the wall clock is used unconditionally.
    Otherwise the primary timestamp field is looked up anywhere in the record
    (first match, depth-first); when it is absent or null the wall clock is
    used instead.

    Raises:
        InvalidTimestamp: The primary timestamp field holds an unsupported value.
    """
    if config.use_now_timestamp:
        return now_epoch_seconds()
    name = config.field_map.primary_timestamp_field
    value = record.find_value(name)
    if value is MISSING or value is None:
        logger.debug("Primary timestamp field %s absent; using current time", name)
        return now_epoch_seconds()
    return to_epoch_seconds(name, value)


def collect_fields(record: RawRecord, config: TranscoderConfig) -> Dict[str, Any]:
    """Apply the inclusion filter and field rules to every top-level field.

    Arrays and nulls are skipped without error.
    """
    fields: Dict[str, Any] = {}
    for key, value in record.items():
        if not config.includes(key):
            continue
        if isinstance(value, list):
            # Array support (e.g. FirewallMatchesActions) is not implemented.
            logger.debug("Skipping array-valued field %s", key)
            continue
        if value is None:
            logger.debug("Skipping null field %s", key)
            continue
        for name, out in apply_field_rules(key, value, config.field_map):
            fields[name] = out
    return fields


def build_message(record: RawRecord, config: TranscoderConfig) -> NormalizedMessage:
    """Assemble the NormalizedMessage for one parsed record."""
    summary = build_summary(record, config.message_summary_fields)
    timestamp = resolve_timestamp(record, config)
    fields = collect_fields(record, config)
    return NormalizedMessage(
        short_message=summary,
        host=config.destination_host,
        timestamp=timestamp,
        fields=fields,
    )
