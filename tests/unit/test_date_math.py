"""
Unit tests for the date math helpers.
"""

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from lanechart.core.date_math import (
    DateRange,
    add_days,
    bar_width,
    date_to_x,
    days_between,
    normalize_range,
    parse_iso_date,
    round_half_away,
    timeline_bounds,
    to_iso,
    total_days,
    x_to_day_delta,
)


class TestParsing:
    def test_parse_iso_string(self):
        assert parse_iso_date("2024-01-05") == date(2024, 1, 5)

    def test_parse_ignores_time_part(self):
        assert parse_iso_date("2024-01-05T23:59:00") == date(2024, 1, 5)

    def test_parse_datetime_and_date(self):
        assert parse_iso_date(datetime(2024, 1, 5, 18, 30)) == date(2024, 1, 5)
        assert parse_iso_date(date(2024, 1, 5)) == date(2024, 1, 5)

    @pytest.mark.parametrize("value", ["", "   ", "not-a-date", "2024-13-01", None, 42])
    def test_parse_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_iso_date(value)

    def test_to_iso(self):
        assert to_iso(date(2024, 3, 9)) == "2024-03-09"


class TestArithmetic:
    def test_days_between_same_day_is_zero(self):
        assert days_between("2024-01-05", "2024-01-05") == 0

    def test_days_between_is_signed(self):
        assert days_between("2024-01-05", "2024-01-06") == 1
        assert days_between("2024-01-06", "2024-01-05") == -1

    def test_days_between_crosses_month_and_leap_day(self):
        assert days_between("2024-02-28", "2024-03-01") == 2

    def test_add_days(self):
        assert add_days(date(2024, 1, 30), 3) == date(2024, 2, 2)
        assert add_days("2024-01-01", -1) == date(2023, 12, 31)

    def test_normalize_range_keeps_ordered_pair(self):
        assert normalize_range("2024-01-01", "2024-01-03") == DateRange(
            date(2024, 1, 1), date(2024, 1, 3)
        )

    def test_normalize_range_swaps_inverted_pair(self):
        rng = normalize_range(date(2024, 1, 9), date(2024, 1, 3))
        assert rng.start == date(2024, 1, 3)
        assert rng.end == date(2024, 1, 9)

    def test_range_as_changes(self):
        rng = DateRange(date(2024, 1, 1), date(2024, 1, 2))
        assert rng.as_changes() == {"start": date(2024, 1, 1), "end": date(2024, 1, 2)}


class TestPixelConversion:
    @pytest.mark.parametrize(
        "value,expected", [(0.5, 1), (1.49, 1), (-0.5, -1), (-1.5, -2), (2.5, 3)]
    )
    def test_round_half_away(self, value, expected):
        assert round_half_away(value) == expected

    def test_x_to_day_delta(self):
        assert x_to_day_delta(18, 6) == 3
        assert x_to_day_delta(-20, 6) == -3
        assert x_to_day_delta(2, 6) == 0

    def test_x_to_day_delta_requires_positive_scale(self):
        with pytest.raises(ValueError):
            x_to_day_delta(10, 0)

    def test_date_to_x(self):
        assert date_to_x("2024-01-08", "2024-01-01", 6) == 42

    def test_single_day_bar_is_one_day_wide(self):
        x = date_to_x("2024-01-05", "2024-01-01", 10)
        assert bar_width(x, x, 10) == 10

    def test_bar_width_includes_end_day(self):
        start_x = date_to_x("2024-01-01", "2024-01-01", 10)
        end_x = date_to_x("2024-01-05", "2024-01-01", 10)
        assert bar_width(start_x, end_x, 10) == 50


class TestBounds:
    def test_bounds_are_padded(self):
        items = [
            SimpleNamespace(start=date(2024, 1, 10), end=date(2024, 1, 12)),
            SimpleNamespace(start=date(2024, 1, 3), end=date(2024, 2, 1)),
        ]
        origin, last = timeline_bounds(items, padding_days=7)
        assert origin == date(2023, 12, 27)
        assert last == date(2024, 2, 8)

    def test_empty_bounds_centre_on_today(self):
        origin, last = timeline_bounds([], padding_days=7, today=date(2024, 6, 1))
        assert origin == date(2024, 5, 25)
        assert last == date(2024, 6, 8)

    def test_total_days_is_inclusive_and_positive(self):
        assert total_days("2024-01-01", "2024-01-10") == 10
        assert total_days("2024-01-10", "2024-01-01") == 1
