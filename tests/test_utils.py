"""Tests for clock and time-label helpers."""

from datetime import date, datetime, time, timezone

import pytest

from washbook.errors import InvalidTimeLabelError
from washbook.utils import (
    combine_date_and_time,
    day_of_week,
    format_clock,
    format_time_label,
    is_time_label,
    parse_clock,
    parse_time_label,
)


class TestParseTimeLabel:
    def test_midnight(self):
        assert parse_time_label("12:00 AM") == time(0, 0)

    def test_noon(self):
        assert parse_time_label("12:00 PM") == time(12, 0)

    def test_afternoon(self):
        assert parse_time_label("1:30 PM") == time(13, 30)

    def test_morning_with_leading_zero(self):
        assert parse_time_label("09:15 AM") == time(9, 15)

    def test_lowercase_and_no_space(self):
        assert parse_time_label("11:45pm") == time(23, 45)

    def test_dotted_period(self):
        assert parse_time_label("7:00 a.m.") == time(7, 0)

    @pytest.mark.parametrize("label", ["13:00 PM", "0:30 AM", "10:60 AM", "10:00", "noon", ""])
    def test_invalid_labels(self, label):
        with pytest.raises(InvalidTimeLabelError):
            parse_time_label(label)

    def test_invalid_label_is_value_error(self):
        with pytest.raises(ValueError):
            parse_time_label("later")

    @pytest.mark.parametrize("label, expected", [("9:00 AM", True), ("25:99 XM", False), (None, False)])
    def test_is_time_label(self, label, expected):
        assert is_time_label(label) is expected


class TestFormatTimeLabel:
    def test_round_trip_edges(self):
        assert format_time_label(time(0, 0)) == "12:00 AM"
        assert format_time_label(time(12, 0)) == "12:00 PM"
        assert format_time_label(time(13, 30)) == "1:30 PM"
        assert format_time_label(time(9, 5)) == "9:05 AM"


class TestClock:
    def test_parse_clock(self):
        assert parse_clock("09:00") == time(9, 0)
        assert parse_clock("17:30:00") == time(17, 30)

    @pytest.mark.parametrize("value", ["9:00", "24:00", "12:60", "noon"])
    def test_parse_clock_invalid(self, value):
        with pytest.raises(InvalidTimeLabelError):
            parse_clock(value)

    def test_format_clock(self):
        assert format_clock(time(7, 5)) == "07:05"


class TestCombine:
    def test_combine_date_and_label(self):
        assert combine_date_and_time(date(2025, 3, 17), "1:30 PM") == datetime(2025, 3, 17, 13, 30)

    def test_combine_with_timezone(self):
        result = combine_date_and_time(date(2025, 3, 17), "8:00 AM", timezone.utc)
        assert result.tzinfo is timezone.utc


class TestDayOfWeek:
    def test_sunday_is_zero(self):
        assert day_of_week(date(2025, 3, 16)) == 0

    def test_monday_is_one(self):
        assert day_of_week(date(2025, 3, 17)) == 1

    def test_saturday_is_six(self):
        assert day_of_week(date(2025, 3, 22)) == 6
