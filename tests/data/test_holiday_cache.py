from __future__ import annotations

import json
import logging

import pytest

from data.cache import DEFAULT_STORAGE_KEY, HolidayCache
from data.models import CacheEntry, HolidayResult, HolidayStatus
from data.store import MemoryBlobStore, PersistenceError

DAY = 24 * 60 * 60


@pytest.fixture
def clock(monkeypatch):
    state = {"now": 1_700_000_000.0}
    monkeypatch.setattr("data.cache.time.time", lambda: state["now"])
    return state


def test_put_then_get_returns_entry(clock) -> None:
    cache = HolidayCache(MemoryBlobStore())
    assert cache.put("2024-01-01", HolidayResult.holiday("元日", "national"))

    entry = cache.get("2024-01-01")
    assert entry == CacheEntry(
        status=HolidayStatus.HOLIDAY,
        timestamp=1_700_000_000_000,
        name="元日",
        type="national",
    )
    assert entry.to_result() == HolidayResult.holiday("元日", "national")


def test_entries_expire_after_ttl_without_purging(clock) -> None:
    store = MemoryBlobStore()
    cache = HolidayCache(store)
    cache.put("2024-01-02", HolidayResult.not_holiday())

    clock["now"] += 120 * DAY
    assert cache.get("2024-01-02") is not None

    clock["now"] += 1
    assert cache.get("2024-01-02") is None
    assert "2024-01-02" in json.loads(store.get(DEFAULT_STORAGE_KEY))


def test_put_merges_into_existing_blob(clock) -> None:
    store = MemoryBlobStore()
    cache = HolidayCache(store)
    cache.put("2024-01-01", HolidayResult.holiday("元日"))
    cache.put("2024-01-02", HolidayResult.not_holiday())

    blob = json.loads(store.get(DEFAULT_STORAGE_KEY))
    assert blob["2024-01-01"] == {
        "status": "holiday",
        "name": "元日",
        "type": "",
        "ts": 1_700_000_000_000,
    }
    assert blob["2024-01-02"] == {"status": "not", "ts": 1_700_000_000_000}
    assert cache.stats()["size"] == 2


def test_error_results_are_not_cacheable(clock) -> None:
    cache = HolidayCache(MemoryBlobStore())
    with pytest.raises(ValueError):
        cache.put("2024-01-01", HolidayResult.error("network"))


@pytest.mark.parametrize("raw", ["{not json", "[1, 2]", '"text"', "null"])
def test_corrupt_blob_reads_as_empty_and_heals(clock, caplog, raw: str) -> None:
    store = MemoryBlobStore()
    store.set(DEFAULT_STORAGE_KEY, raw)
    cache = HolidayCache(store)

    with caplog.at_level(logging.WARNING, logger="datecontext.cache"):
        assert cache.get("2024-01-01") is None
    assert "reset" in caplog.text

    assert cache.put("2024-01-01", HolidayResult.not_holiday())
    assert json.loads(store.get(DEFAULT_STORAGE_KEY)) == {
        "2024-01-01": {"status": "not", "ts": 1_700_000_000_000}
    }


def test_malformed_entries_are_absent(clock) -> None:
    store = MemoryBlobStore()
    store.set(
        DEFAULT_STORAGE_KEY,
        json.dumps(
            {
                "2024-01-01": {"status": "holiday", "name": "元日"},
                "2024-01-02": {"status": "maybe", "ts": 1},
                "2024-01-03": "holiday",
                "2024-01-04": {"status": "error", "ts": 1_700_000_000_000},
                "2024-01-05": {"status": "not", "ts": float("nan")},
                "2024-01-06": {"status": "not", "ts": float("inf")},
            }
        ),
    )
    cache = HolidayCache(store)
    for day in range(1, 7):
        assert cache.get(f"2024-01-{day:02d}") is None


def test_persistence_failure_degrades_to_noop(clock, caplog) -> None:
    cache = HolidayCache(MemoryBlobStore(max_bytes=10))

    with caplog.at_level(logging.WARNING, logger="datecontext.cache"):
        assert cache.put("2024-01-01", HolidayResult.holiday("元日")) is False

    assert "write skipped" in caplog.text
    assert cache.get("2024-01-01") is None


def test_unexpected_store_error_is_swallowed(clock) -> None:
    class BrokenStore(MemoryBlobStore):
        def set(self, key: str, value: str) -> None:
            raise PersistenceError("disk full")

    cache = HolidayCache(BrokenStore())
    assert cache.put("2024-01-01", HolidayResult.not_holiday()) is False


def test_disabled_cache_bypasses_store(clock) -> None:
    store = MemoryBlobStore()
    cache = HolidayCache(store, enabled=False)
    assert cache.put("2024-01-01", HolidayResult.not_holiday()) is False
    assert cache.get("2024-01-01") is None
    assert store.get(DEFAULT_STORAGE_KEY) is None
    assert cache.stats()["enabled"] is False
