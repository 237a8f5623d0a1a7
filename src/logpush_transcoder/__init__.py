"""Package initialization for logpush-transcoder.

The public entry point is :func:`logpush_transcoder.transcoder.transcode`,
re-exported here together with the configuration and error types callers need
to drive it.
"""
from __future__ import annotations

from .errors import (
    InvalidTimestamp,
    MalformedRecord,
    TranscodeError,
    UnsupportedFieldType,
)
from .models.config import FieldMap, TranscoderConfig
from .models.message import NormalizedMessage
from .transcoder import transcode

__all__ = [
    "transcode",
    "TranscoderConfig",
    "FieldMap",
    "NormalizedMessage",
    "TranscodeError",
    "MalformedRecord",
    "InvalidTimestamp",
    "UnsupportedFieldType",
]
