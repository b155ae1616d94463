from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from dates import civil


@pytest.mark.parametrize("key", ["2024-01-01", "2024-02-29", "1999-12-31", "0001-01-01"])
def test_key_round_trips_parse(key: str) -> None:
    assert civil.key(civil.parse(key)) == key


@pytest.mark.parametrize(
    "text",
    [
        "2024-13-01",
        "2023-02-29",
        "2024-04-31",
        "2024-1-01",
        "2024/01/01",
        " 2024-01-01",
        "",
        "20240101",
        "２０２４-01-01",
        "2024-١2-01",
    ],
)
def test_parse_rejects_malformed_or_invalid_dates(text: str) -> None:
    with pytest.raises(civil.FormatError):
        civil.parse(text)


def test_parse_rejects_non_string() -> None:
    with pytest.raises(civil.FormatError):
        civil.parse(20240101)  # type: ignore[arg-type]


def test_today_uses_named_zone_not_host() -> None:
    # 2024-01-01 20:00 UTC is already 2024-01-02 in Tokyo.
    instant = datetime(2024, 1, 1, 20, 0, tzinfo=timezone.utc)
    assert civil.today("Asia/Tokyo", now=instant) == date(2024, 1, 2)
    assert civil.today("UTC", now=instant) == date(2024, 1, 1)


def test_today_accepts_any_aware_instant() -> None:
    instant = datetime(2024, 6, 30, 23, 30, tzinfo=timezone(timedelta(hours=-7)))
    assert civil.today("Asia/Tokyo", now=instant) == date(2024, 7, 1)


def test_today_rejects_unknown_zone() -> None:
    with pytest.raises(civil.UnknownZoneError):
        civil.today("Mars/Olympus_Mons")


def test_today_rejects_naive_now() -> None:
    with pytest.raises(ValueError):
        civil.today("Asia/Tokyo", now=datetime(2024, 1, 1))
