from __future__ import annotations

import pytest

from data.providers.base import ShapeError
from data.providers.payload import (
    HolidayInfo,
    PayloadShape,
    classify_payload,
    decode_holiday_payload,
)


def test_classify_payload_variants() -> None:
    assert classify_payload({"name": "x"}) is PayloadShape.OBJECT
    assert classify_payload([{"name": "x"}]) is PayloadShape.ARRAY
    assert classify_payload([]) is PayloadShape.EMPTY
    assert classify_payload(None) is PayloadShape.EMPTY
    assert classify_payload(["x"]) is PayloadShape.UNSUPPORTED
    assert classify_payload("holiday") is PayloadShape.UNSUPPORTED


def test_array_uses_first_object() -> None:
    payload = [
        {"date": "2024-01-01", "name": "元日", "type": "祝日"},
        {"date": "2024-01-01", "name": "ignored"},
    ]
    assert decode_holiday_payload(payload) == HolidayInfo(
        name="元日", type="祝日", date="2024-01-01"
    )


def test_object_falls_back_to_title() -> None:
    info = decode_holiday_payload({"name": "", "title": "成人の日"})
    assert info.name == "成人の日"
    assert info.type == ""


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"name": ""},
        {"name": "   "},
        {"name": 42},
        {"name": True, "title": "  "},
        [],
        [None],
        "text",
        3,
        None,
        [{"type": "祝日"}],
    ],
)
def test_payload_without_name_is_shape_error(payload) -> None:
    with pytest.raises(ShapeError):
        decode_holiday_payload(payload)
