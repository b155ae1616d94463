"""Civil-date parsing and calendar arithmetic."""

from .civil import DEFAULT_ZONE, FormatError, UnknownZoneError, key, parse, today
from .metrics import (
    Period,
    WeekPosition,
    calendar_year_period,
    diff_days,
    diff_label,
    fiscal_year_period,
    is_weekend,
    monday_anchor,
    week_position,
    weekday_index,
    weekday_label,
)

__all__ = [
    "DEFAULT_ZONE",
    "FormatError",
    "Period",
    "UnknownZoneError",
    "WeekPosition",
    "calendar_year_period",
    "diff_days",
    "diff_label",
    "fiscal_year_period",
    "is_weekend",
    "key",
    "monday_anchor",
    "parse",
    "today",
    "week_position",
    "weekday_index",
    "weekday_label",
]
