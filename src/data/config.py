"""Configuration for the holiday lookup and date context service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, MutableMapping

from dates.civil import DEFAULT_ZONE

from .cache import DEFAULT_STORAGE_KEY

DEFAULT_API_BASE = "https://api.national-holidays.jp/"


class ConfigError(ValueError):
    """Raised when required configuration is missing or invalid."""


def _get_env(source: Mapping[str, str] | None) -> Mapping[str, str]:
    if source is None:
        return os.environ
    return source


def _get_str(source: Mapping[str, str], key: str, default: str) -> str:
    raw = source.get(key)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def _get_int(source: Mapping[str, str], key: str, default: int) -> int:
    raw = source.get(key)
    if raw is None:
        return default
    stripped = raw.strip()
    if not stripped:
        return default
    try:
        value = int(stripped)
    except ValueError as exc:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _get_bool(source: Mapping[str, str], key: str, default: bool) -> bool:
    raw = source.get(key)
    if raw is None:
        return default
    lowered = raw.strip().lower()
    if not lowered:
        return default
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    raise ConfigError(f"{key} must be a boolean string, got {raw!r}")


@dataclass(frozen=True)
class DateContextConfig:
    """Holiday authority endpoint, cache behavior and the fixed civil zone."""

    api_base: str = DEFAULT_API_BASE
    fetch_timeout_ms: int = 4500
    cache_ttl_days: int = 120
    cache_enabled: bool = True
    cache_dir: str = "storage/cache"
    cache_key: str = DEFAULT_STORAGE_KEY
    timezone_name: str = DEFAULT_ZONE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "DateContextConfig":
        env_map = _get_env(env)
        api_base = _get_str(env_map, "HOLIDAY_API_BASE", DEFAULT_API_BASE)
        if not api_base.startswith(("http://", "https://")):
            raise ConfigError(f"HOLIDAY_API_BASE must be an http(s) URL, got {api_base!r}")
        return cls(
            api_base=api_base,
            fetch_timeout_ms=_get_int(env_map, "HOLIDAY_FETCH_TIMEOUT_MS", 4500),
            cache_ttl_days=_get_int(env_map, "HOLIDAY_CACHE_TTL_DAYS", 120),
            cache_enabled=_get_bool(env_map, "HOLIDAY_CACHE_ENABLED", True),
            cache_dir=_get_str(env_map, "HOLIDAY_CACHE_DIR", "storage/cache"),
            cache_key=_get_str(env_map, "HOLIDAY_CACHE_KEY", DEFAULT_STORAGE_KEY),
            timezone_name=_get_str(env_map, "DATE_CONTEXT_TIMEZONE", DEFAULT_ZONE),
            log_level=(env_map.get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def fetch_timeout_seconds(self) -> float:
        return self.fetch_timeout_ms / 1000.0

    @property
    def cache_ttl_seconds(self) -> int:
        return self.cache_ttl_days * 24 * 60 * 60

    def as_dict(self) -> MutableMapping[str, str | int | bool]:
        """Expose configuration for debugging/log serialization."""

        return {
            "api_base": self.api_base,
            "fetch_timeout_ms": self.fetch_timeout_ms,
            "cache_ttl_days": self.cache_ttl_days,
            "cache_enabled": self.cache_enabled,
            "cache_dir": self.cache_dir,
            "cache_key": self.cache_key,
            "timezone_name": self.timezone_name,
            "log_level": self.log_level,
        }
