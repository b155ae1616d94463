from __future__ import annotations

import pytest

from data.config import DEFAULT_API_BASE, ConfigError, DateContextConfig


def test_defaults_without_env() -> None:
    config = DateContextConfig.from_env({})

    assert config.api_base == DEFAULT_API_BASE
    assert config.fetch_timeout_seconds == 4.5
    assert config.cache_ttl_seconds == 120 * 24 * 60 * 60
    assert config.cache_enabled is True
    assert config.timezone_name == "Asia/Tokyo"
    assert config.as_dict()["cache_key"] == "ckHolidayCache_v1"


def test_env_overrides() -> None:
    config = DateContextConfig.from_env(
        {
            "HOLIDAY_API_BASE": "http://localhost:8080/holidays/",
            "HOLIDAY_FETCH_TIMEOUT_MS": "1500",
            "HOLIDAY_CACHE_TTL_DAYS": "7",
            "HOLIDAY_CACHE_ENABLED": "off",
            "HOLIDAY_CACHE_DIR": "/tmp/holidays",
            "DATE_CONTEXT_TIMEZONE": "UTC",
            "LOG_LEVEL": "debug",
        }
    )

    assert config.api_base == "http://localhost:8080/holidays/"
    assert config.fetch_timeout_seconds == 1.5
    assert config.cache_ttl_days == 7
    assert config.cache_enabled is False
    assert config.cache_dir == "/tmp/holidays"
    assert config.timezone_name == "UTC"
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize(
    "env",
    [
        {"HOLIDAY_FETCH_TIMEOUT_MS": "soon"},
        {"HOLIDAY_CACHE_TTL_DAYS": "0"},
        {"HOLIDAY_CACHE_ENABLED": "maybe"},
        {"HOLIDAY_API_BASE": "ftp://example.org/"},
    ],
)
def test_invalid_values_raise(env) -> None:
    with pytest.raises(ConfigError):
        DateContextConfig.from_env(env)


def test_reads_process_environment(monkeypatch) -> None:
    monkeypatch.setenv("HOLIDAY_CACHE_KEY", "custom_v2")
    assert DateContextConfig.from_env().cache_key == "custom_v2"
