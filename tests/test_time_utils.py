"""Tests for HH:MM parsing and worked-hours arithmetic."""

import pytest

from petrohr.core.time_utils import compute_total_hours, minutes_since_midnight, validate_hhmm


class TestTotalHours:

    def test_overnight_shift_wraps(self):
        assert compute_total_hours("22:00", "06:00") == 8

    def test_day_shift(self):
        assert compute_total_hours("08:00", "17:00") == 9

    def test_equal_times_give_zero(self):
        assert compute_total_hours("09:00", "09:00") == 0

    def test_one_minute_before_is_almost_a_day(self):
        assert compute_total_hours("00:01", "00:00") == pytest.approx(23 + 59 / 60)

    def test_partial_hours(self):
        assert compute_total_hours("08:15", "12:45") == 4.5

    def test_missing_side_gives_none(self):
        assert compute_total_hours(None, "17:00") is None
        assert compute_total_hours("08:00", None) is None
        assert compute_total_hours("", "") is None


class TestClockFormat:

    def test_minutes_since_midnight(self):
        assert minutes_since_midnight("00:00") == 0
        assert minutes_since_midnight("23:59") == 23 * 60 + 59

    @pytest.mark.parametrize("value", ["24:00", "7:00", "12:60", "12-30", "", "noon"])
    def test_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            validate_hhmm(value)

    def test_accepts_valid(self):
        assert validate_hhmm("07:05") == "07:05"
