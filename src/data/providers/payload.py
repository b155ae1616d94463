"""Decoding of holiday authority response bodies.

The authority answers either with a single object or with an array of
objects. Decoding is explicit about which variant it saw:

1. ``ARRAY``: the first element is used when it is an object.
2. ``OBJECT``: the object itself is used.
3. anything else (``EMPTY``, ``UNSUPPORTED``) is a shape error.

Within the selected record the name is ``name`` then ``title`` (first
non-empty string wins); ``type`` and ``date`` are optional.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from .base import ShapeError


class PayloadShape(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    EMPTY = "empty"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class HolidayInfo:
    name: str
    type: str = ""
    date: str = ""


def classify_payload(payload: Any) -> PayloadShape:
    if payload is None:
        return PayloadShape.EMPTY
    if isinstance(payload, list):
        if not payload:
            return PayloadShape.EMPTY
        return PayloadShape.ARRAY if isinstance(payload[0], Mapping) else PayloadShape.UNSUPPORTED
    if isinstance(payload, Mapping):
        return PayloadShape.OBJECT
    return PayloadShape.UNSUPPORTED


def _text(record: Mapping[str, Any], *fields: str) -> str:
    for field in fields:
        value = record.get(field)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def decode_holiday_payload(payload: Any) -> HolidayInfo:
    shape = classify_payload(payload)
    if shape is PayloadShape.ARRAY:
        record = payload[0]
    elif shape is PayloadShape.OBJECT:
        record = payload
    else:
        raise ShapeError(f"{shape.value} payload")
    name = _text(record, "name", "title")
    if not name:
        raise ShapeError(f"{shape.value} payload without name")
    return HolidayInfo(name=name, type=_text(record, "type"), date=_text(record, "date"))


__all__ = ["HolidayInfo", "PayloadShape", "classify_payload", "decode_holiday_payload"]
