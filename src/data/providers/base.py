"""Holiday lookup failure taxonomy and metric sink contract."""

from __future__ import annotations

from typing import Callable, Mapping

MetricSink = Callable[[str, float, Mapping[str, object] | None], None]


class HolidayLookupError(Exception):
    """Base class for failures that resolve to a transient error result."""

    public_message = "network"
    outcome = "transport_error"


class TransportError(HolidayLookupError):
    """Connection, TLS, abort or body decoding fault."""


class LookupTimeout(TransportError):
    """The holiday authority did not answer within the per-call timeout."""

    outcome = "timeout"


class HttpStatusError(HolidayLookupError):
    """Non-success status other than not-found."""

    outcome = "http_error"

    def __init__(self, status_code: int) -> None:
        super().__init__(f"holiday authority returned HTTP {status_code}")
        self.status_code = status_code

    @property
    def public_message(self) -> str:  # type: ignore[override]
        return f"HTTP {self.status_code}"


class ShapeError(HolidayLookupError):
    """Success status but the payload does not carry a holiday name."""

    public_message = "unexpected response"
    outcome = "shape_error"


__all__ = [
    "HolidayLookupError",
    "HttpStatusError",
    "LookupTimeout",
    "MetricSink",
    "ShapeError",
    "TransportError",
]
