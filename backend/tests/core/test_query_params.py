"""Query Params: raw-string parsing for route parameters.

Tests:
    - Blank values count as absent; required ones raise MissingParameterError
    - Integers are strict ("7abc", "1.5" and oversized digit runs rejected) and bounded inclusively
    - Dates parse as ISO-8601 and normalize to UTC; overflowing offsets are rejected
"""

from datetime import datetime, timezone

import pytest

from pothole_api.core.errors import MissingParameterError, ParameterValidationError
from pothole_api.core.query_params import (
    CITY_REQUIRED,
    iso_or_none,
    optional_text,
    parse_bounded_int,
    parse_csv_list,
    parse_optional_date,
    parse_optional_float,
    parse_optional_int,
    require_city,
    require_text,
)


def _days(value):
    return parse_bounded_int(
        value, "days", default=7, minimum=1, maximum=14,
        message="Days must be between 1 and 14",
    )


def test_require_text_strips_value():
    assert require_text("  Chicago ", "city", CITY_REQUIRED) == "Chicago"


@pytest.mark.parametrize("value", [None, "", "   "])
def test_require_city_rejects_missing_or_blank(value):
    with pytest.raises(MissingParameterError) as exc_info:
        require_city(value)
    assert exc_info.value.message == "City parameter is required"
    assert exc_info.value.http_status == 400
    assert exc_info.value.parameter == "city"


def test_optional_text_blank_is_none():
    assert optional_text("  ") is None
    assert optional_text(None) is None
    assert optional_text(" Ward 1 ") == "Ward 1"


def test_bounded_int_defaults_when_absent():
    assert _days(None) == 7
    assert _days("") == 7


@pytest.mark.parametrize("value, expected", [("1", 1), ("14", 14), (" 3 ", 3)])
def test_bounded_int_accepts_inclusive_bounds(value, expected):
    assert _days(value) == expected


@pytest.mark.parametrize("value", ["0", "15", "-1", "abc", "7abc", "1.5"])
def test_bounded_int_rejects_out_of_range_and_non_numeric(value):
    with pytest.raises(ParameterValidationError) as exc_info:
        _days(value)
    assert exc_info.value.message == "Days must be between 1 and 14"


def test_bounded_int_without_maximum():
    assert parse_bounded_int(
        "5000", "radius", default=20, minimum=1, maximum=None, message="bad",
    ) == 5000


def test_optional_int_parses_signed():
    assert parse_optional_int("2024", "fiscalYear", "Invalid fiscal year") == 2024
    assert parse_optional_int("+3", "x", "bad") == 3
    assert parse_optional_int(None, "x", "bad") is None


def test_optional_int_rejects_trailing_garbage():
    with pytest.raises(ParameterValidationError):
        parse_optional_int("2024x", "fiscalYear", "Invalid fiscal year")


def test_optional_int_rejects_digit_strings_past_int_limit():
    with pytest.raises(ParameterValidationError) as exc_info:
        parse_optional_int("9" * 5000, "fiscalYear", "Invalid fiscal year")
    assert exc_info.value.message == "Invalid fiscal year"
    assert exc_info.value.parameter == "fiscalYear"


def test_bounded_int_rejects_huge_digit_string_as_out_of_range():
    with pytest.raises(ParameterValidationError) as exc_info:
        _days("1" * 5000)
    assert exc_info.value.message == "Days must be between 1 and 14"


def test_optional_float_rejects_non_finite():
    for value in ("nan", "inf", "-inf", "north"):
        with pytest.raises(ParameterValidationError):
            parse_optional_float(value, "lat", "Invalid coordinates")
    assert parse_optional_float("41.88", "lat", "Invalid coordinates") == 41.88


def test_date_without_time_is_utc_midnight():
    parsed = parse_optional_date("2024-03-15", "startDate", "Invalid start date format")
    assert parsed == datetime(2024, 3, 15, tzinfo=timezone.utc)
    assert iso_or_none(parsed) == "2024-03-15T00:00:00+00:00"


def test_date_with_zulu_suffix():
    parsed = parse_optional_date("2024-03-15T10:30:00Z", "startDate", "bad")
    assert parsed == datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)


def test_date_with_offset_converted_to_utc():
    parsed = parse_optional_date("2024-03-15T10:30:00-05:00", "endDate", "bad")
    assert parsed == datetime(2024, 3, 15, 15, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("value", ["2024-13-45", "yesterday", "15/03/2024"])
def test_invalid_date_raises(value):
    with pytest.raises(ParameterValidationError) as exc_info:
        parse_optional_date(value, "startDate", "Invalid start date format")
    assert exc_info.value.message == "Invalid start date format"


@pytest.mark.parametrize("value", [
    "9999-12-31T23:00:00-05:00",
    "0001-01-01T00:30:00+01:00",
])
def test_date_whose_utc_instant_leaves_calendar_raises(value):
    with pytest.raises(ParameterValidationError) as exc_info:
        parse_optional_date(value, "startDate", "Invalid start date format")
    assert exc_info.value.message == "Invalid start date format"
    assert exc_info.value.parameter == "startDate"


def test_csv_list_drops_blanks():
    assert parse_csv_list("infrastructure, ,civic_tech,") == ["infrastructure", "civic_tech"]
    assert parse_csv_list(None) == []


def test_iso_or_none_passes_none():
    assert iso_or_none(None) is None
