from datetime import datetime, timezone

import pytest

from utils.utils import (
    format_phone_number,
    format_upstream_timestamp,
    parse_iso_datetime,
    timestamp_sort_key
)


@pytest.mark.parametrize("raw,expected", [
    ("9876543210", "+919876543210"),
    ("919876543210", "+919876543210"),
    ("+91 98765-43210", "+919876543210"),
    ("(987) 654 3210", "+919876543210"),
    ("+14155550100", "+14155550100"),
])
def test_format_phone_number(raw, expected):
    assert format_phone_number(raw) == expected


def test_parse_iso_datetime_variants():
    assert parse_iso_datetime("2024-01-25T14:30:00Z") == datetime(2024, 1, 25, 14, 30, tzinfo=timezone.utc)
    assert parse_iso_datetime("2024-01-25T14:30:00").tzinfo is timezone.utc
    assert parse_iso_datetime("2024-01-25").day == 25
    assert parse_iso_datetime("yesterday") is None
    assert parse_iso_datetime(None) is None


def test_timestamp_sort_key_missing_sorts_oldest():
    assert timestamp_sort_key(None) == 0.0
    assert timestamp_sort_key("garbage") == 0.0
    assert timestamp_sort_key("2024-01-02T00:00:00Z") > timestamp_sort_key("2024-01-01T00:00:00Z")


def test_format_upstream_timestamp_converts_to_utc():
    local = datetime.fromisoformat("2024-01-25T14:30:45.123+05:30")
    assert format_upstream_timestamp(local) == "2024-01-25T09:00:45+00:00"
