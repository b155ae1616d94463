"""Holiday data access: persisted cache, configuration and result types."""

from .cache import CacheCorruptionError, HolidayCache
from .config import ConfigError, DateContextConfig
from .models import CacheEntry, HolidayResult, HolidayStatus
from .store import BlobStore, FileBlobStore, MemoryBlobStore, PersistenceError

__all__ = [
    "BlobStore",
    "CacheCorruptionError",
    "CacheEntry",
    "ConfigError",
    "DateContextConfig",
    "FileBlobStore",
    "HolidayCache",
    "HolidayResult",
    "HolidayStatus",
    "MemoryBlobStore",
    "PersistenceError",
]
