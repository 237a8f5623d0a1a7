"""Resolved transcoder configuration models.

These are the read-only values the transcoder consumes. They are frozen so a
single instance can be shared by any number of concurrent ``transcode`` calls.
Loading them from the environment is the job of ``logpush_transcoder.config``.
"""
from __future__ import annotations

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["FieldMap", "TranscoderConfig", "parse_field_list"]


def parse_field_list(v: Any) -> Tuple[str, ...]:
    """Parse a comma-separated string (or sequence) into an ordered set of names.

    Entries are stripped, empty entries dropped and duplicates removed while
    keeping the first occurrence. ``None`` yields an empty tuple.
    """
    if v is None:
        return ()
    if isinstance(v, str):
        items = v.split(",")
    else:
        items = list(v)
    seen: dict[str, None] = {}
    for item in items:
        name = str(item).strip()
        if name:
            seen.setdefault(name, None)
    return tuple(seen)


class FieldMap(BaseModel):
    """Names of the fields that receive special handling.

    Defaults follow the Cloudflare Logpush HTTP requests dataset. Other feed
    versions or vendors can reuse the transcoder by supplying their own names.
    """

    model_config = ConfigDict(frozen=True)

    primary_timestamp_field: str = "EdgeStartTimestamp"
    timestamp_fields: Tuple[str, ...] = ("EdgeStartTimestamp", "EdgeEndTimestamp")
    status_code_fields: Tuple[str, ...] = (
        "CacheResponseStatus",
        "EdgeResponseStatus",
        "OriginResponseStatus",
    )
    # Expressed in nanoseconds by the feed.
    response_time_field: Optional[str] = "OriginResponseTime"

    @field_validator("timestamp_fields", "status_code_fields", mode="before")
    @classmethod
    def _parse_names(cls, v: Any) -> Tuple[str, ...]:
        return parse_field_list(v)

    @field_validator("primary_timestamp_field", mode="before")
    @classmethod
    def _strip_primary(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError("primary_timestamp_field must not be blank")
        return v

    @field_validator("response_time_field", mode="before")
    @classmethod
    def _blank_response_time_to_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, str):
            return v.strip() or None
        return v


class TranscoderConfig(BaseModel):
    """Resolved, immutable configuration for one transcoding setup.

    ``message_summary_fields`` and ``message_fields`` accept either sequences
    or the comma-separated strings used by environment variables. An empty
    ``message_fields`` normalizes to ``None``, meaning every field is included.
    """

    model_config = ConfigDict(frozen=True)

    message_summary_fields: Tuple[str, ...] = Field(default_factory=tuple)
    message_fields: Optional[Tuple[str, ...]] = None
    use_now_timestamp: bool = False
    destination_host: str = ""
    field_map: FieldMap = Field(default_factory=FieldMap)

    @field_validator("message_summary_fields", mode="before")
    @classmethod
    def _parse_summary_fields(cls, v: Any) -> Tuple[str, ...]:
        return parse_field_list(v)

    @field_validator("message_fields", mode="before")
    @classmethod
    def _parse_message_fields(cls, v: Any) -> Optional[Tuple[str, ...]]:
        names = parse_field_list(v)
        return names or None

    def includes(self, name: str) -> bool:
        """Return True when ``name`` passes the ``message_fields`` filter."""
        return self.message_fields is None or name in self.message_fields
