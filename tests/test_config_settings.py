from __future__ import annotations

import pytest
from pydantic import ValidationError

from logpush_transcoder.config import DEFAULT_SUMMARY_FIELDS, Settings, get_settings
from logpush_transcoder.models.config import FieldMap, TranscoderConfig

_ENV_KEYS = [
    "DESTINATION_HOST",
    "LOGPUSH_MESSAGE_SUMMARY_FIELDS",
    "LOGPUSH_MESSAGE_FIELDS",
    "LOGPUSH_USE_NOW_TIMESTAMP",
    "LOGPUSH_PRIMARY_TIMESTAMP_FIELD",
    "LOGPUSH_TIMESTAMP_FIELDS",
    "LOGPUSH_STATUS_CODE_FIELDS",
    "LOGPUSH_RESPONSE_TIME_FIELD",
]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_resolve_cloudflare_config(monkeypatch):
    monkeypatch.setenv("DESTINATION_HOST", "graylog-input-1")
    config = Settings().to_transcoder_config()
    assert config.destination_host == "graylog-input-1"
    assert config.message_summary_fields == tuple(
        s.strip() for s in DEFAULT_SUMMARY_FIELDS.split(",")
    )
    assert config.message_fields is None
    assert config.use_now_timestamp is False
    assert config.field_map == FieldMap()


def test_comma_separated_env_values(monkeypatch):
    monkeypatch.setenv("LOGPUSH_MESSAGE_SUMMARY_FIELDS", " ClientIP , ,RayID,ClientIP")
    monkeypatch.setenv("LOGPUSH_MESSAGE_FIELDS", "ClientIP,EdgeResponseStatus")
    monkeypatch.setenv("LOGPUSH_USE_NOW_TIMESTAMP", "true")
    config = Settings().to_transcoder_config()
    assert config.message_summary_fields == ("ClientIP", "RayID")
    assert config.message_fields == ("ClientIP", "EdgeResponseStatus")
    assert config.use_now_timestamp is True


def test_blank_message_fields_means_all(monkeypatch):
    monkeypatch.setenv("LOGPUSH_MESSAGE_FIELDS", "  ")
    config = Settings().to_transcoder_config()
    assert config.message_fields is None
    assert config.includes("anything")


def test_field_map_overrides(monkeypatch):
    monkeypatch.setenv("LOGPUSH_PRIMARY_TIMESTAMP_FIELD", "EdgeEndTimestamp")
    monkeypatch.setenv("LOGPUSH_TIMESTAMP_FIELDS", "EdgeEndTimestamp")
    monkeypatch.setenv("LOGPUSH_STATUS_CODE_FIELDS", "EdgeResponseStatus")
    monkeypatch.setenv("LOGPUSH_RESPONSE_TIME_FIELD", "")
    fm = Settings().to_transcoder_config().field_map
    assert fm.primary_timestamp_field == "EdgeEndTimestamp"
    assert fm.timestamp_fields == ("EdgeEndTimestamp",)
    assert fm.status_code_fields == ("EdgeResponseStatus",)
    assert fm.response_time_field is None


def test_overrides_ignore_none():
    config = Settings(DESTINATION_HOST="a").to_transcoder_config(
        destination_host=None, message_fields="X", use_now_timestamp=True
    )
    assert config.destination_host == "a"
    assert config.message_fields == ("X",)
    assert config.use_now_timestamp is True


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("DESTINATION_HOST", "first")
    assert get_settings().DESTINATION_HOST == "first"
    monkeypatch.setenv("DESTINATION_HOST", "second")
    assert get_settings().DESTINATION_HOST == "first"
    get_settings.cache_clear()
    assert get_settings().DESTINATION_HOST == "second"


def test_transcoder_config_is_frozen():
    config = TranscoderConfig(destination_host="h")
    with pytest.raises(ValidationError):
        config.destination_host = "other"  # type: ignore[misc]


def test_blank_primary_timestamp_rejected():
    with pytest.raises(ValidationError):
        FieldMap(primary_timestamp_field="  ")
