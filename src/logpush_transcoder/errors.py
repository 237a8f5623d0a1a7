"""Error hierarchy for record transcoding.

Error layers:
- TranscodeError: Base class for every failure raised by ``transcode``
- MalformedRecord: The input text is not a JSON object
- InvalidTimestamp: A timestamp-role field holds an unrecognized encoding
- UnsupportedFieldType: A field value has no scalar mapping (nested object)

None of these are recoverable for the record being processed. Callers decide
whether to log and skip the record or to abort the batch; the transcoder
itself never emits a partial message.
"""
from __future__ import annotations

from typing import Any, Optional


class TranscodeError(ValueError):
    """Base class for all transcoding errors."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        value: Any = None,
        code: Optional[str] = None,
    ) -> None:
        self.message = message
        self.field = field
        self.value = value
        self.code = code or self.__class__.__name__
        super().__init__(message)


class MalformedRecord(TranscodeError):
    """Input text does not parse as a structured record."""


class InvalidTimestamp(TranscodeError):
    """A timestamp-role field holds a value of unrecognized kind or unparseable text."""

    def __init__(self, field: str, value: Any, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Invalid timestamp in field [{field}] value [{value!r}]{detail}. "
            "Expected RFC 3339 text, integer seconds or integer nanoseconds.",
            field=field,
            value=value,
        )


class UnsupportedFieldType(TranscodeError):
    """A field value has a structural kind with no scalar mapping."""

    def __init__(self, field: str, kind: str, value: Any = None) -> None:
        self.kind = kind
        super().__init__(
            f"Unsupported value type [{kind}] in field [{field}].",
            field=field,
            value=value,
        )


__all__ = [
    "TranscodeError",
    "MalformedRecord",
    "InvalidTimestamp",
    "UnsupportedFieldType",
]
