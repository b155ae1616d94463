"""Weekday, day-distance and week-of-period calculations on civil dates."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

FISCAL_START_MONTH = 4

_DOW_JA = ("日曜日", "月曜日", "火曜日", "水曜日", "木曜日", "金曜日", "土曜日")
_DOW_EN = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


@dataclass(frozen=True, slots=True)
class Period:
    """Inclusive span of civil dates."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"period end {self.end} precedes start {self.start}")

    def __contains__(self, value: object) -> bool:
        return isinstance(value, date) and self.start <= value <= self.end

    @property
    def label(self) -> str:
        return f"{self.start.isoformat()}..{self.end.isoformat()}"


@dataclass(frozen=True, slots=True)
class WeekPosition:
    index: int
    total: int
    weeks_remaining: int


def weekday_index(value: date) -> int:
    """0 = Sunday through 6 = Saturday."""

    return (value.weekday() + 1) % 7


def is_weekend(index: int) -> bool:
    return index in (0, 6)


def weekday_label(index: int) -> str:
    return f"{_DOW_JA[index]} ({_DOW_EN[index]})"


def weekend_badge(index: int) -> str:
    return "土日" if is_weekend(index) else "平日"


def diff_days(start: date, end: date) -> int:
    """Signed whole days from ``start`` to ``end``."""

    return end.toordinal() - start.toordinal()


def monday_anchor(value: date) -> date:
    return value - timedelta(days=value.weekday())


def week_position(value: date, period: Period) -> WeekPosition:
    """Monday-aligned, 1-based week index of ``value`` within ``period``."""

    first_monday = monday_anchor(period.start)
    last_monday = monday_anchor(period.end)
    this_monday = monday_anchor(value)
    index = diff_days(first_monday, this_monday) // 7 + 1
    total = diff_days(first_monday, last_monday) // 7 + 1
    return WeekPosition(index=index, total=total, weeks_remaining=max(0, total - index))


def calendar_year_period(value: date) -> Period:
    return Period(date(value.year, 1, 1), date(value.year, 12, 31))


def fiscal_year_period(value: date) -> Period:
    """April-start fiscal year containing ``value``."""

    start_year = value.year if value >= date(value.year, FISCAL_START_MONTH, 1) else value.year - 1
    start = date(start_year, FISCAL_START_MONTH, 1)
    return Period(start, date(start_year + 1, FISCAL_START_MONTH, 1) - timedelta(days=1))


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def diff_label(days: int) -> str:
    """Human phrase for a signed day distance, e.g. ``1 week 2 days later, +9 days``."""

    if days == 0:
        return "today, 0 days"
    weeks, remainder = divmod(abs(days), 7)
    parts = []
    if weeks:
        parts.append(_plural(weeks, "week"))
    if remainder:
        parts.append(_plural(remainder, "day"))
    if days > 0:
        return f"{' '.join(parts)} later, +{days} days"
    return f"{' '.join(parts)} earlier, -{abs(days)} days"


__all__ = [
    "FISCAL_START_MONTH",
    "Period",
    "WeekPosition",
    "calendar_year_period",
    "diff_days",
    "diff_label",
    "fiscal_year_period",
    "is_weekend",
    "monday_anchor",
    "week_position",
    "weekday_index",
    "weekday_label",
    "weekend_badge",
]
