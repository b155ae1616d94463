from __future__ import annotations

import pytest

from data.store import FileBlobStore, MemoryBlobStore, PersistenceError


def test_file_store_round_trip(tmp_path) -> None:
    store = FileBlobStore(tmp_path / "cache")
    assert store.get("blob") is None

    store.set("blob", '{"a": 1}')
    store.set("blob", '{"a": 2}')

    assert store.get("blob") == '{"a": 2}'
    assert store.path_for("blob") == tmp_path / "cache" / "blob.json"
    assert [p.name for p in (tmp_path / "cache").iterdir()] == ["blob.json"]


def test_file_store_wraps_os_errors(tmp_path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    store = FileBlobStore(blocker)

    with pytest.raises(PersistenceError):
        store.set("blob", "{}")


def test_memory_store_enforces_quota() -> None:
    store = MemoryBlobStore(max_bytes=4)
    store.set("k", "1234")
    with pytest.raises(PersistenceError):
        store.set("k", "12345")
    assert store.get("k") == "1234"
