"""Date context computation for a single presentation surface."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, List, Protocol, Set

from data.models import HolidayResult, HolidayStatus
from dates import civil
from dates.metrics import (
    Period,
    WeekPosition,
    calendar_year_period,
    diff_days,
    diff_label,
    fiscal_year_period,
    is_weekend,
    week_position,
    weekday_index,
    weekday_label,
)

from .coordinator import RequestCoordinator, RequestToken

_LOGGER = logging.getLogger("datecontext.ops.context")


class HolidaySource(Protocol):
    def resolve(self, key: str) -> Awaitable[HolidayResult]: ...


@dataclass(frozen=True, slots=True)
class DateContext:
    """Fields available immediately, before the holiday lookup finishes."""

    date_key: str
    date: date
    weekday_index: int
    weekday_label: str
    is_weekend: bool
    business_day_pending: bool
    diff_days: int
    diff_label: str
    year_week: WeekPosition
    fiscal_week: WeekPosition
    fiscal_period: Period
    token: RequestToken


@dataclass(frozen=True, slots=True)
class HolidayUpdate:
    context: DateContext
    result: HolidayResult

    @property
    def is_business_day(self) -> bool | None:
        """None when the holiday status could not be determined."""

        if self.context.is_weekend:
            return False
        if self.result.status is HolidayStatus.ERROR:
            return None
        return self.result.status is HolidayStatus.NOT_HOLIDAY


Listener = Callable[[HolidayUpdate], None]


class DateContextService:
    """Computes date contexts and delivers only the newest holiday outcome."""

    def __init__(
        self,
        resolver: HolidaySource,
        *,
        coordinator: RequestCoordinator | None = None,
        timezone_name: str = civil.DEFAULT_ZONE,
        today: Callable[[], date] | None = None,
    ) -> None:
        self._resolver = resolver
        self._coordinator = coordinator or RequestCoordinator()
        self._timezone_name = timezone_name
        self._today = today or (lambda: civil.today(self._timezone_name))
        self._listeners: List[Listener] = []
        self._tasks: Set[asyncio.Task[HolidayUpdate | None]] = set()

    @property
    def coordinator(self) -> RequestCoordinator:
        return self._coordinator

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def compute_date_context(self, date_key: str) -> DateContext:
        """Compute the synchronous fields and claim a new lookup generation."""

        value = civil.parse(date_key)
        index = weekday_index(value)
        weekend = is_weekend(index)
        delta = diff_days(self._today(), value)
        fiscal = fiscal_year_period(value)
        return DateContext(
            date_key=civil.key(value),
            date=value,
            weekday_index=index,
            weekday_label=weekday_label(index),
            is_weekend=weekend,
            business_day_pending=not weekend,
            diff_days=delta,
            diff_label=diff_label(delta),
            year_week=week_position(value, calendar_year_period(value)),
            fiscal_week=week_position(value, fiscal),
            fiscal_period=fiscal,
            token=self._coordinator.issue(),
        )

    async def resolve_holiday(self, context: DateContext) -> HolidayUpdate | None:
        result = await self._resolver.resolve(context.date_key)
        if not self._coordinator.is_current(context.token):
            _LOGGER.debug(
                "dropping superseded holiday result for %s (token %s, latest %s)",
                context.date_key,
                context.token,
                self._coordinator.latest,
            )
            return None
        update = HolidayUpdate(context=context, result=result)
        for listener in list(self._listeners):
            listener(update)
        return update

    def show(self, date_key: str) -> DateContext:
        """Compute ``date_key`` and schedule its holiday lookup on the running loop."""

        context = self.compute_date_context(date_key)
        task = asyncio.get_running_loop().create_task(self.resolve_holiday(context))
        self._tasks.add(task)
        task.add_done_callback(self._finish_task)
        return context

    def _finish_task(self, task: asyncio.Task[HolidayUpdate | None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _LOGGER.error("holiday lookup task failed", exc_info=exc)

    def show_today(self) -> DateContext:
        return self.show(civil.key(self._today()))

    def clear(self) -> None:
        """Supersede any in-flight lookup without starting another."""

        self._coordinator.issue()

    def pending(self) -> Set[asyncio.Task[HolidayUpdate | None]]:
        return set(self._tasks)


__all__ = ["DateContext", "DateContextService", "HolidaySource", "HolidayUpdate", "Listener"]
