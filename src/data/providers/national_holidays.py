"""Holiday resolver backed by the Japanese national holiday API."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import requests

from ..cache import HolidayCache
from ..config import DEFAULT_API_BASE
from ..models import HolidayResult
from .base import (
    HolidayLookupError,
    HttpStatusError,
    LookupTimeout,
    MetricSink,
    TransportError,
)
from .payload import decode_holiday_payload

DEFAULT_TIMEOUT_SECONDS = 4.5


class HolidayResolver:
    """Cache-first holiday determination for one date key per call."""

    def __init__(
        self,
        cache: HolidayCache,
        *,
        base_url: str = DEFAULT_API_BASE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
        metric_sink: MetricSink | None = None,
    ) -> None:
        self._cache = cache
        self._base_url = base_url
        self._timeout_seconds = timeout_seconds
        self._session = session or requests.Session()
        self._metric_sink = metric_sink
        self.logger = logging.getLogger("datecontext.data.holidays")

    def url_for(self, key: str) -> str:
        return self._base_url + quote(key, safe="")

    async def resolve(self, key: str) -> HolidayResult:
        cached = self._cache.get(key)
        if cached is not None:
            self._record("cache_hit")
            return cached.to_result()

        try:
            result = await self._lookup(key)
        except HolidayLookupError as exc:
            self.logger.warning("holiday lookup for %s failed: %s", key, exc)
            self._record(exc.outcome)
            return HolidayResult.error(exc.public_message)

        self._cache.put(key, result)
        self._record(result.status.name.lower())
        return result

    async def _lookup(self, key: str) -> HolidayResult:
        url = self.url_for(key)
        response = await asyncio.to_thread(self._get, url)
        if response.status_code == 404:
            return HolidayResult.not_holiday()
        if not response.ok:
            raise HttpStatusError(response.status_code)
        info = decode_holiday_payload(self._json(response))
        return HolidayResult.holiday(info.name, info.type)

    def _get(self, url: str) -> requests.Response:
        try:
            return self._session.get(
                url,
                timeout=self._timeout_seconds,
                headers={"Accept": "application/json", "Cache-Control": "no-store"},
            )
        except requests.Timeout as exc:
            raise LookupTimeout(f"no answer within {self._timeout_seconds}s") from exc
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"undecodable body: {exc}") from exc

    def _record(self, outcome: str) -> None:
        if self._metric_sink is None:
            return
        self._metric_sink("holiday_lookup", 1.0, {"outcome": outcome})


__all__ = ["DEFAULT_TIMEOUT_SECONDS", "HolidayResolver"]
