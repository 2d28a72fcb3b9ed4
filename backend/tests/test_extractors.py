import math
from datetime import date, datetime, timedelta, timezone

import pytest

from callpulse.api.standardization.extractors import (
    as_bool,
    as_date,
    as_label,
    as_number,
    as_text,
    as_text_list,
    first_success,
    from_fields,
)


@pytest.mark.parametrize("value,expected", [
    (42, 42.0),
    (3.5, 3.5),
    ("12", 12.0),
    ("7.25 points", 7.25),
    ("-4e2", -400.0),
    (".5", 0.5),
])
def test_as_number_parses_leading_numbers(value, expected):
    assert as_number(value) == expected


@pytest.mark.parametrize("value", [None, True, False, "abc", "", [], {}, float("nan"), float("inf"), "1e999"])
def test_as_number_rejects_non_finite_and_non_numbers(value):
    assert as_number(value) is None


def test_as_text_trims_and_rejects_blank():
    assert as_text("  Sam ") == "Sam"
    assert as_text("   ") is None
    assert as_text(5) is None


def test_as_label_keeps_text_and_stringifies_numbers():
    assert as_label("Billing") == "Billing"
    assert as_label(200) == "200"
    assert as_label("") is None
    assert as_label(False) is None


def test_as_bool_only_accepts_booleans():
    assert as_bool(False) is False
    assert as_bool("false") is None
    assert as_bool(0) is None


def test_as_text_list():
    assert as_text_list(["a", "b"]) == ["a", "b"]
    assert as_text_list(" slow down ") == ["slow down"]
    assert as_text_list([]) is None
    assert as_text_list(["a", 1]) is None
    assert as_text_list("") is None


@pytest.mark.parametrize("value,expected", [
    ("2024-01-15", date(2024, 1, 15)),
    ("2024-01-15T23:30:00", date(2024, 1, 15)),
    ("2024-01-15T23:30:00-05:00", date(2024, 1, 16)),
    ("2024-01-15T10:00:00Z", date(2024, 1, 15)),
    ("2024-01-15 garbage", date(2024, 1, 15)),
    ("01/15/2024", date(2024, 1, 15)),
    ("Mon, 15 Jan 2024 10:00:00 GMT", date(2024, 1, 15)),
    (1705312800, date(2024, 1, 15)),
    (1705312800000, date(2024, 1, 15)),
    (date(2024, 1, 15), date(2024, 1, 15)),
    (datetime(2024, 1, 15, 22, tzinfo=timezone(timedelta(hours=-6))), date(2024, 1, 16)),
    ("January 15, 2024", date(2024, 1, 15)),
    ("15 Jan 2024 09:30", date(2024, 1, 15)),
])
def test_as_date_accepts_common_formats(value, expected):
    assert as_date(value) == expected


@pytest.mark.parametrize("value", [None, "", "not a date", "2024-13-45", 15, 87.5, True, "85", "12.5", "1705312800",
                                   10 ** 400, -(10 ** 400)])
def test_as_date_rejects_invalid_values(value):
    assert as_date(value) is None


def test_from_fields_scans_in_order_skipping_unusable_values():
    extract = from_fields(["a", "b", "c"], as_number)

    assert extract({"a": "n/a", "b": 4, "c": 9}) == 4.0
    assert extract({"c": 9}) == 9.0
    assert extract({}) is None


def test_first_success_reports_defaulting():
    extractors = [from_fields(["x"], as_text), from_fields(["y"], as_text)]

    assert first_success({"y": "found"}, extractors, "fallback") == ("found", False)
    assert first_success({}, extractors, "fallback") == ("fallback", True)


def test_first_success_calls_default_factories():
    value, defaulted = first_success({}, [], lambda: ["placeholder"])

    assert value == ["placeholder"]
    assert defaulted is True
    assert not math.isnan(first_success({}, [], 2.5)[0])


@pytest.mark.parametrize("coerce", [as_number, as_label, as_date])
def test_integers_beyond_float_range_are_rejected(coerce):
    assert coerce(10 ** 400) is None
    assert coerce(-(10 ** 400)) is None


def test_large_integers_within_float_range_still_coerce():
    assert as_number(10 ** 20) == 1e20
    assert as_label(10 ** 20) == str(10 ** 20)
    assert as_number("1" + "0" * 400) is None
