"""Pydantic model for the normalized output message.

``NormalizedMessage`` is what the transcoder hands to the delivery side of the
pipeline. It mirrors a GELF message: a short summary line, the originating
host, a numeric timestamp and a flat bag of scalar additional fields.
"""
from __future__ import annotations

from typing import Any, Dict, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

__all__ = ["NormalizedMessage", "ScalarValue", "GELF_VERSION"]

GELF_VERSION = "1.1"

# StrictBool is listed first so JSON booleans never collapse into integers.
ScalarValue = Union[StrictBool, StrictInt, StrictFloat, StrictStr]


class NormalizedMessage(BaseModel):
    """A single normalized log message.

    Attributes:
        short_message: Human-readable summary built from the configured
            summary fields (may be empty).
        host: Identity of the originating host, copied from configuration.
        timestamp: Seconds since the epoch; fractional for nanosecond inputs.
        fields: Additional fields in record order. Values are always scalars.
    """

    short_message: str
    host: str
    timestamp: float
    fields: Dict[str, ScalarValue] = Field(default_factory=dict)

    def to_gelf(self) -> Dict[str, Any]:
        """Render the message as a GELF 1.1 payload dictionary.

        Additional fields are prefixed with ``_``. GELF reserves ``_id``, so a
        record field named ``id`` is emitted as ``_id_``.
        """
        payload: Dict[str, Any] = {
            "version": GELF_VERSION,
            "host": self.host,
            "short_message": self.short_message,
            "timestamp": self.timestamp,
        }
        for key, value in self.fields.items():
            name = "_id_" if key == "id" else f"_{key}"
            payload[name] = value
        return payload
