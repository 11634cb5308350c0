from datetime import date, time

import pytest

from chattercup.shared.validators import (
    format_price,
    normalize_tags,
    parse_iso_date,
    parse_slot_time,
    validate_http_url,
)


@pytest.mark.parametrize(
    "value",
    ["https://meet.google.com/abc-defg-hij", "http://example.com", " https://zoom.us/j/1 "],
)
def test_validate_http_url_accepts_http_urls(value):
    assert validate_http_url(value) is True


@pytest.mark.parametrize(
    "value", [None, "", "meet.google.com/abc", "ftp://example.com", "https://", "javascript:alert(1)"]
)
def test_validate_http_url_rejects_everything_else(value):
    assert validate_http_url(value) is False


def test_normalize_tags_trims_and_dedupes_in_order():
    assert normalize_tags([" Product ", "Careers", "", "Product", "  ", None, "AI"]) == [
        "Product",
        "Careers",
        "AI",
    ]


def test_normalize_tags_handles_missing_values():
    assert normalize_tags(None) == []
    assert normalize_tags([]) == []


def test_parse_iso_date():
    assert parse_iso_date("2030-02-14") == date(2030, 2, 14)
    with pytest.raises(ValueError):
        parse_iso_date("2030-02-30")
    with pytest.raises(ValueError):
        parse_iso_date("14/02/2030")


def test_parse_slot_time():
    assert parse_slot_time("09:30") == time(9, 30)
    assert parse_slot_time("9:00") == time(9, 0)
    with pytest.raises(ValueError):
        parse_slot_time("25:00")


@pytest.mark.parametrize(
    "cents,expected",
    [(0, "$0.00"), (None, "$0.00"), (1250, "$12.50"), (2500, "$25.00"), (99, "$0.99")],
)
def test_format_price(cents, expected):
    assert format_price(cents) == expected
