from __future__ import annotations

from datetime import date

import pytest

from sales_reporting.date_ranges import DateFilter, DateRange, resolve_date_range

TODAY = date(2024, 3, 15)  # a Friday


@pytest.mark.parametrize(
    ("keyword", "expected"),
    [
        ("TODAY", DateRange(date(2024, 3, 15), date(2024, 3, 15))),
        ("THIS_WEEK", DateRange(date(2024, 3, 11), date(2024, 3, 15))),
        ("THIS_MONTH", DateRange(date(2024, 3, 1), date(2024, 3, 15))),
        ("LAST_6_MONTHS", DateRange(date(2023, 10, 1), date(2024, 3, 15))),
        ("THIS_YEAR", DateRange(date(2024, 1, 1), date(2024, 3, 15))),
    ],
)
def test_named_windows_end_today(keyword: str, expected: DateRange) -> None:
    assert resolve_date_range(keyword, today=TODAY) == expected


def test_this_week_on_a_monday_starts_that_day() -> None:
    monday = date(2024, 3, 11)
    assert resolve_date_range("THIS_WEEK", today=monday) == DateRange(monday, monday)


def test_keyword_lookup_ignores_case_and_whitespace() -> None:
    assert DateFilter.parse("  this_month ") is DateFilter.THIS_MONTH


@pytest.mark.parametrize("raw", [None, "", "LAST_DECADE", "yesterday"])
def test_unknown_keyword_falls_back_to_this_year(raw: str | None) -> None:
    assert resolve_date_range(raw, today=TODAY) == DateRange(date(2024, 1, 1), TODAY)


def test_custom_bounds_are_parsed() -> None:
    got = resolve_date_range("CUSTOM", "2024-02-01", "2024-02-29", today=TODAY)
    assert got == DateRange(date(2024, 2, 1), date(2024, 2, 29))


def test_custom_reversed_bounds_are_swapped() -> None:
    got = resolve_date_range("CUSTOM", "2024-02-10", "2024-01-01", today=TODAY)
    assert got == DateRange(date(2024, 1, 1), date(2024, 2, 10))


def test_custom_unparsable_bounds_fall_back_without_raising() -> None:
    got = resolve_date_range("CUSTOM", "not-a-date", "15/03/2024", today=TODAY)
    assert got == DateRange(date(2024, 3, 1), TODAY)


def test_custom_missing_bounds_use_month_start_and_today() -> None:
    assert resolve_date_range("CUSTOM", None, None, today=TODAY) == DateRange(
        date(2024, 3, 1), TODAY
    )


def test_last_six_months_crosses_year_boundary() -> None:
    got = resolve_date_range(DateFilter.LAST_6_MONTHS, today=date(2024, 2, 29))
    assert got.start == date(2023, 9, 1)
    assert got.contains(date(2023, 9, 1))
    assert not got.contains(date(2023, 8, 31))


@pytest.mark.parametrize("raw", ["20240210", "2024-W06-6", "2024-2-10", "2024-02-10T00:00"])
def test_custom_bounds_accept_only_calendar_dates(raw: str) -> None:
    got = resolve_date_range("CUSTOM", raw, None, today=TODAY)
    assert got == DateRange(date(2024, 3, 1), TODAY)
