"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file: the Logpush summary and field
selection, the timestamp strategy, the destination host and the names of the
fields that receive special handling.

The `get_settings` function provides a cached, singleton instance of the
configuration, and `Settings.to_transcoder_config` resolves it into the
immutable `TranscoderConfig` consumed by the transcoder.
"""
from __future__ import annotations

import socket
from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

from .models.config import FieldMap, TranscoderConfig, parse_field_list

DEFAULT_SUMMARY_FIELDS = (
    "ClientRequestHost, ClientRequestPath, OriginIP, ClientSrcPort, "
    "EdgeServerIP, EdgeResponseBytes"
)


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    List-valued settings are read as comma-separated strings. They are typed
    as `Any` so pydantic-settings does not try to JSON-decode them; the
    validator turns them into lists of stripped names.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    DESTINATION_HOST: str = Field(
        default_factory=socket.gethostname,
        description="Host name attached to every output message (defaults to this machine)",
    )

    # ---------------- Message construction -----------------
    LOGPUSH_MESSAGE_SUMMARY_FIELDS: Any = Field(
        default=DEFAULT_SUMMARY_FIELDS,
        description=(
            "Comma-separated field names rendered, in this order, into the "
            "message summary line. Names missing from a record are skipped."
        ),
    )
    LOGPUSH_MESSAGE_FIELDS: Any = Field(
        default_factory=list,
        description=(
            "Optional comma-separated allow-list of fields copied into the "
            "message. Empty (default) copies every field."
        ),
    )
    LOGPUSH_USE_NOW_TIMESTAMP: bool = Field(
        default=False,
        description=(
            "If true, stamp messages with the current time instead of the "
            "record's primary timestamp field."
        ),
    )

    # ---------------- Recognized field names -----------------
    LOGPUSH_PRIMARY_TIMESTAMP_FIELD: str = Field(
        default="EdgeStartTimestamp",
        description="Field searched (anywhere in the record) for the message timestamp",
    )
    LOGPUSH_TIMESTAMP_FIELDS: Any = Field(
        default="EdgeStartTimestamp,EdgeEndTimestamp",
        description="Comma-separated fields converted in place to epoch seconds",
    )
    LOGPUSH_STATUS_CODE_FIELDS: Any = Field(
        default="CacheResponseStatus,EdgeResponseStatus,OriginResponseStatus",
        description="Comma-separated HTTP status fields that receive a <field>Class bucket",
    )
    LOGPUSH_RESPONSE_TIME_FIELD: Optional[str] = Field(
        default="OriginResponseTime",
        description="Nanosecond response-time field that receives a <field>Millis copy (blank disables)",
    )

    @field_validator(
        "LOGPUSH_MESSAGE_SUMMARY_FIELDS",
        "LOGPUSH_MESSAGE_FIELDS",
        "LOGPUSH_TIMESTAMP_FIELDS",
        "LOGPUSH_STATUS_CODE_FIELDS",
        mode="before",
    )
    @classmethod
    def parse_comma_separated(cls, v: str | list[str] | None) -> list[str]:
        """Parse comma-separated string into list of stripped strings.

        Supports both direct list input (from code/tests) and comma-separated
        string input (from environment variables). Empty entries and repeated
        names are dropped.
        """
        return list(parse_field_list(v))

    @field_validator("LOGPUSH_RESPONSE_TIME_FIELD", mode="before")
    @classmethod
    def blank_to_none(cls, v: Any) -> Optional[str]:
        """Trim whitespace and normalize blank -> None."""
        if isinstance(v, str):
            return v.strip() or None
        return v

    def to_transcoder_config(self, **overrides: Any) -> TranscoderConfig:
        """Resolve these settings into an immutable TranscoderConfig.

        Keyword overrides (e.g. from CLI flags) replace the matching
        TranscoderConfig attribute; `None` values are ignored.
        """
        values: dict[str, Any] = {
            "message_summary_fields": self.LOGPUSH_MESSAGE_SUMMARY_FIELDS,
            "message_fields": self.LOGPUSH_MESSAGE_FIELDS,
            "use_now_timestamp": self.LOGPUSH_USE_NOW_TIMESTAMP,
            "destination_host": self.DESTINATION_HOST,
            "field_map": FieldMap(
                primary_timestamp_field=self.LOGPUSH_PRIMARY_TIMESTAMP_FIELD,
                timestamp_fields=self.LOGPUSH_TIMESTAMP_FIELDS,
                status_code_fields=self.LOGPUSH_STATUS_CODE_FIELDS,
                response_time_field=self.LOGPUSH_RESPONSE_TIME_FIELD,
            ),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TranscoderConfig(**values)


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
