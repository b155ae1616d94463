"""Soft-TTL holiday cache persisted as a single JSON blob."""

from __future__ import annotations

import json
import logging
import math
import time
from typing import Any, Dict, Mapping, MutableMapping

from .models import CacheEntry, HolidayResult, HolidayStatus
from .store import BlobStore, PersistenceError

DEFAULT_STORAGE_KEY = "ckHolidayCache_v1"
DEFAULT_TTL_SECONDS = 120 * 24 * 60 * 60

_LOGGER = logging.getLogger("datecontext.cache")


class CacheCorruptionError(ValueError):
    """The persisted blob is not a JSON object of date key -> entry."""


def _now_ms() -> int:
    return int(time.time() * 1000)


def _decode_blob(raw: str) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise CacheCorruptionError(f"invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise CacheCorruptionError(f"expected object, got {type(data).__name__}")
    return data


def _decode_entry(payload: object) -> CacheEntry | None:
    if not isinstance(payload, Mapping):
        return None
    try:
        status = HolidayStatus(payload.get("status"))
    except ValueError:
        return None
    if status is HolidayStatus.ERROR:
        return None
    timestamp = payload.get("ts")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        return None
    if not math.isfinite(timestamp):
        return None
    name = payload.get("name")
    kind = payload.get("type")
    return CacheEntry(
        status=status,
        timestamp=int(timestamp),
        name=name if isinstance(name, str) else "",
        type=kind if isinstance(kind, str) else "",
    )


class HolidayCache:
    """Date key -> holiday determination, read and written as one blob.

    Stale entries are ignored on read but left in storage; they are replaced
    the next time that date resolves successfully.
    """

    def __init__(
        self,
        store: BlobStore,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        enabled: bool = True,
    ) -> None:
        self._store = store
        self._storage_key = storage_key
        self._ttl_ms = ttl_seconds * 1000
        self._enabled = enabled

    def get(self, key: str) -> CacheEntry | None:
        if not self._enabled:
            return None
        entry = _decode_entry(self._load().get(key))
        if entry is None:
            return None
        if _now_ms() - entry.timestamp > self._ttl_ms:
            _LOGGER.debug("cache entry for %s expired", key)
            return None
        return entry

    def put(self, key: str, result: HolidayResult) -> bool:
        """Persist ``result`` under ``key``; returns False when the write was skipped."""

        if not result.is_persistable:
            raise ValueError("error results are not cacheable")
        if not self._enabled:
            return False
        blob = self._load()
        blob[key] = CacheEntry.from_result(result, _now_ms()).as_dict()
        try:
            self._store.set(self._storage_key, json.dumps(blob, ensure_ascii=False))
        except (PersistenceError, TypeError, ValueError) as exc:
            _LOGGER.warning("holiday cache write skipped for %s: %s", key, exc)
            return False
        return True

    def _load(self) -> Dict[str, Any]:
        try:
            raw = self._store.get(self._storage_key)
        except (OSError, UnicodeDecodeError) as exc:
            _LOGGER.warning("holiday cache %s unreadable: %s", self._storage_key, exc)
            return {}
        if not raw:
            return {}
        try:
            return _decode_blob(raw)
        except CacheCorruptionError as exc:
            _LOGGER.warning("holiday cache %s reset: %s", self._storage_key, exc)
            return {}

    def stats(self) -> MutableMapping[str, Any]:
        return {
            "enabled": self._enabled,
            "storage_key": self._storage_key,
            "ttl_seconds": self._ttl_ms // 1000,
            "size": len(self._load()) if self._enabled else 0,
        }


__all__ = [
    "CacheCorruptionError",
    "DEFAULT_STORAGE_KEY",
    "DEFAULT_TTL_SECONDS",
    "HolidayCache",
]
