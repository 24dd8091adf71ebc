"""
Unit tests for the interval and formatting helpers.
"""

from datetime import datetime

import pytest

from schedule_assist.services.availability_store import TimeWindow
from schedule_assist.utils.helpers import (
    InvalidTimeFormatError,
    format_duration,
    format_time_window,
    get_day_name,
    measure_execution_time,
    minutes_to_time,
    overlaps,
    time_to_minutes,
)


class TestTimeToMinutes:
    """Tests for time_to_minutes."""

    def test_midnight(self):
        assert time_to_minutes("00:00") == 0

    def test_last_minute_of_day(self):
        assert time_to_minutes("23:59") == 1439

    def test_single_digit_hour(self):
        assert time_to_minutes("9:30") == 570

    @pytest.mark.parametrize("value", ["", "9", "09-30", "24:00", "12:60", "ab:cd", "09:3", None, 930])
    def test_malformed_input_fails_fast(self, value):
        with pytest.raises(InvalidTimeFormatError):
            time_to_minutes(value)

    def test_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            time_to_minutes("noon")


class TestMinutesToTime:
    """Tests for minutes_to_time."""

    def test_pads_hours_and_minutes(self):
        assert minutes_to_time(545) == "09:05"

    def test_out_of_range(self):
        with pytest.raises(ValueError):
            minutes_to_time(1440)


class TestOverlaps:
    """Tests for the half-open overlap primitive."""

    def test_touching_windows_do_not_overlap(self):
        # [9:00, 10:00) vs [10:00, 11:00)
        assert overlaps(540, 600, 600, 660) is False
        assert overlaps(600, 660, 540, 600) is False

    def test_identical_windows_overlap(self):
        assert overlaps(540, 600, 540, 600) is True

    def test_containment_overlaps(self):
        assert overlaps(540, 720, 600, 630) is True
        assert overlaps(600, 630, 540, 720) is True

    def test_disjoint_windows(self):
        assert overlaps(540, 600, 700, 800) is False

    def test_symmetric(self):
        windows = [(0, 60), (30, 90), (60, 120), (0, 1440), (100, 101), (90, 100)]
        for a in windows:
            for b in windows:
                assert overlaps(*a, *b) == overlaps(*b, *a)

    def test_accepts_datetimes(self):
        start = datetime(2025, 1, 6, 9, 0)
        assert overlaps(start, start.replace(hour=10), start.replace(minute=30), start.replace(hour=11))


class TestFormatting:
    """Tests for display helpers."""

    def test_day_name_monday_first(self):
        assert get_day_name(0) == "Monday"
        assert get_day_name(6) == "Sunday"

    def test_format_time_window(self):
        assert format_time_window(TimeWindow("09:00", "17:00")) == "09:00 - 17:00"

    @pytest.mark.parametrize("minutes,expected", [
        (1, "1 minute"),
        (45, "45 minutes"),
        (60, "1 hour"),
        (90, "1 hour and 30 minutes"),
        (121, "2 hours and 1 minute"),
    ])
    def test_format_duration(self, minutes, expected):
        assert format_duration(minutes) == expected


class TestMeasureExecutionTime:
    """Tests for the timing decorator."""

    def test_returns_result(self):
        @measure_execution_time
        def add(a, b):
            return a + b

        assert add(2, 3) == 5
        assert add.__name__ == "add"

    def test_reraises(self):
        @measure_execution_time
        def boom():
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            boom()
