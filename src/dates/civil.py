"""Strict YYYY-MM-DD conversion and zone-pinned "today"."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_ZONE = "Asia/Tokyo"

_DATE_KEY = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")


class FormatError(ValueError):
    """Raised when a date key is not a calendar-valid YYYY-MM-DD string."""


class UnknownZoneError(ValueError):
    """Raised when the configured zone name is not in the tz database."""


def parse(text: str) -> date:
    """Parse a canonical date key, rejecting anything but a real calendar date."""

    if not isinstance(text, str):
        raise FormatError(f"date key must be a string, got {type(text).__name__}")
    match = _DATE_KEY.fullmatch(text)
    if match is None:
        raise FormatError(f"expected YYYY-MM-DD, got {text!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise FormatError(f"{text!r} is not a valid calendar date") from exc


def key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def today(zone_name: str = DEFAULT_ZONE, *, now: datetime | None = None) -> date:
    """Return the current civil date as observed in ``zone_name``.

    ``now`` must be timezone-aware when given; it exists for tests.
    """

    try:
        zone = ZoneInfo(zone_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise UnknownZoneError(f"unknown timezone {zone_name!r}") from exc
    instant = now or datetime.now(timezone.utc)
    if instant.tzinfo is None:
        raise ValueError("now must be timezone-aware")
    return instant.astimezone(zone).date()


__all__ = ["DEFAULT_ZONE", "FormatError", "UnknownZoneError", "key", "parse", "today"]
