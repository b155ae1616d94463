"""Minimal string-keyed blob stores backing the holiday cache."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, Protocol


class PersistenceError(Exception):
    """Raised when a blob cannot be written."""


class BlobStore(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class FileBlobStore:
    """One ``<key>.json`` file per storage key, replaced atomically on write."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"failed to write {path}: {exc}") from exc


class MemoryBlobStore:
    """In-process store with an optional byte quota."""

    def __init__(self, max_bytes: int | None = None) -> None:
        self._max_bytes = max_bytes
        self._blobs: Dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        size = len(value.encode("utf-8"))
        if self._max_bytes is not None and size > self._max_bytes:
            raise PersistenceError(f"quota exceeded: {size} > {self._max_bytes} bytes")
        with self._lock:
            self._blobs[key] = value


__all__ = ["BlobStore", "FileBlobStore", "MemoryBlobStore", "PersistenceError"]
