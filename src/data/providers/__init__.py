"""Holiday authority clients and response decoding."""

from .base import (
    HolidayLookupError,
    HttpStatusError,
    LookupTimeout,
    MetricSink,
    ShapeError,
    TransportError,
)
from .national_holidays import HolidayResolver
from .payload import HolidayInfo, PayloadShape, classify_payload, decode_holiday_payload

__all__ = [
    "HolidayInfo",
    "HolidayLookupError",
    "HolidayResolver",
    "HttpStatusError",
    "LookupTimeout",
    "MetricSink",
    "PayloadShape",
    "ShapeError",
    "TransportError",
    "classify_payload",
    "decode_holiday_payload",
]
