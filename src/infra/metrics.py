"""Prometheus metric sink for holiday lookups."""

from __future__ import annotations

import logging
from typing import Mapping

from prometheus_client import Counter, start_http_server

_HOLIDAY_LOOKUPS = Counter(
    "holiday_lookup_total",
    "Holiday lookups by outcome",
    ["outcome"],
)
_LOGGER = logging.getLogger("datecontext.metrics")
_SERVER_PORT: int | None = None


class PrometheusMetricSink:
    """Callable metric sink counting ``holiday_lookup`` outcomes."""

    def __call__(self, name: str, value: float, tags: Mapping[str, object] | None = None) -> None:
        if name != "holiday_lookup":
            _LOGGER.debug("ignoring unknown metric %s", name)
            return
        outcome = str((tags or {}).get("outcome", "unknown"))
        _HOLIDAY_LOOKUPS.labels(outcome=outcome).inc(value)


def ensure_metrics_server(port: int) -> int:
    """Expose the lookup counter on ``port``; later calls reuse the first server."""

    global _SERVER_PORT
    if _SERVER_PORT is None:
        start_http_server(port)
        _SERVER_PORT = port
        _LOGGER.info("metrics exposed on port %s", port)
    return _SERVER_PORT


__all__ = ["PrometheusMetricSink", "ensure_metrics_server"]
