"""Public facade for Logpush record transcoding.

This module provides the stable public API for converting one decompressed
Logpush line into a NormalizedMessage. Parsing lives in
``logpush_transcoder.models.logpush`` and all mapping logic is delegated to
``logpush_transcoder.mapping.orchestrator``.

Public Functions:
    transcode: Convert raw record text to a NormalizedMessage
"""
from __future__ import annotations

from .mapping.orchestrator import build_message
from .models.config import TranscoderConfig
from .models.logpush import parse_record
from .models.message import NormalizedMessage

__all__ = ["transcode"]


def transcode(raw_text: str | bytes, config: TranscoderConfig) -> NormalizedMessage:
    """Convert one Logpush record into a normalized message.

    The call is a pure function of its arguments except when the wall clock
    supplies the timestamp (``use_now_timestamp``, or no primary timestamp in
    the record). ``config`` is only read, so one instance can be shared by
    concurrent callers.

    Args:
        raw_text: A single, already decompressed JSON record.
        config: Resolved transcoder configuration.

    Returns:
        The assembled NormalizedMessage.

    Raises:
        MalformedRecord: ``raw_text`` is not a JSON object.
        InvalidTimestamp: A timestamp-role field holds an unsupported value.
        UnsupportedFieldType: An included field holds a nested object.
    """
    record = parse_record(raw_text)
    return build_message(record, config)
