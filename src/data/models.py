"""Holiday lookup result types shared by the cache and the resolver."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class HolidayStatus(str, Enum):
    HOLIDAY = "holiday"
    NOT_HOLIDAY = "not"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class HolidayResult:
    """Outcome of a single holiday determination."""

    status: HolidayStatus
    name: str = ""
    type: str = ""
    message: str = ""

    @classmethod
    def holiday(cls, name: str, type: str = "") -> "HolidayResult":
        return cls(HolidayStatus.HOLIDAY, name=name, type=type)

    @classmethod
    def not_holiday(cls) -> "HolidayResult":
        return cls(HolidayStatus.NOT_HOLIDAY)

    @classmethod
    def error(cls, message: str) -> "HolidayResult":
        return cls(HolidayStatus.ERROR, message=message)

    @property
    def is_persistable(self) -> bool:
        return self.status is not HolidayStatus.ERROR


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Persisted holiday determination; ``timestamp`` is epoch milliseconds."""

    status: HolidayStatus
    timestamp: int
    name: str = ""
    type: str = ""

    @classmethod
    def from_result(cls, result: HolidayResult, timestamp: int) -> "CacheEntry":
        return cls(status=result.status, timestamp=timestamp, name=result.name, type=result.type)

    def to_result(self) -> HolidayResult:
        return HolidayResult(self.status, name=self.name, type=self.type)

    def as_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"status": self.status.value, "ts": self.timestamp}
        if self.name:
            payload["name"] = self.name
        if self.status is HolidayStatus.HOLIDAY:
            payload["type"] = self.type
        return payload


__all__ = ["CacheEntry", "HolidayResult", "HolidayStatus"]
