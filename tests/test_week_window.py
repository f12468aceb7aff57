"""Tests for Monday-start week windows."""

from datetime import date, datetime, timedelta

import pytest

from rosterview.domain.week import WeekDirection, WeekWindow


class TestCanonicalize:
    """Tests for WeekWindow.canonicalize."""

    def test_wednesday_maps_to_preceding_monday(self):
        """A Wednesday belongs to the week starting two days earlier."""
        window = WeekWindow.canonicalize(date(2024, 12, 11))

        assert window.start_date == date(2024, 12, 9)
        assert window.days == tuple(date(2024, 12, d) for d in range(9, 16))

    def test_monday_maps_to_itself(self):
        window = WeekWindow.canonicalize(date(2024, 12, 9))
        assert window.start_date == date(2024, 12, 9)

    def test_sunday_maps_to_previous_monday(self):
        window = WeekWindow.canonicalize(date(2024, 12, 15))
        assert window.start_date == date(2024, 12, 9)
        assert window.end_date == date(2024, 12, 15)

    def test_datetime_input_ignores_time(self):
        window = WeekWindow.canonicalize(datetime(2024, 12, 15, 23, 59))
        assert window.start_date == date(2024, 12, 9)

    def test_year_boundary(self):
        """New Year's Day 2025 falls in the week starting 30 Dec 2024."""
        window = WeekWindow.canonicalize(date(2025, 1, 1))

        assert window.start_date == date(2024, 12, 30)
        assert window.end_date == date(2025, 1, 5)

    def test_leap_day(self):
        window = WeekWindow.canonicalize(date(2024, 2, 29))

        assert window.start_date == date(2024, 2, 26)
        assert window.days[-1] == date(2024, 3, 3)

    def test_every_date_lands_in_a_monday_window(self):
        """Canonical start is always a Monday and contains the date."""
        d = date(2023, 12, 1)
        while d < date(2025, 3, 1):
            window = WeekWindow.canonicalize(d)
            assert window.start_date.weekday() == 0
            assert window.start_date <= d <= window.start_date + timedelta(days=6)
            assert window.contains(d)
            d += timedelta(days=1)

    def test_rejects_non_monday_start(self):
        with pytest.raises(ValueError):
            WeekWindow(date(2024, 12, 11))


class TestStepping:
    """Tests for moving between weeks."""

    @pytest.fixture
    def window(self):
        return WeekWindow.canonicalize(date(2024, 12, 11))

    def test_forward_moves_seven_days(self, window):
        assert window.step(WeekDirection.FORWARD).start_date == date(2024, 12, 16)

    def test_backward_moves_seven_days(self, window):
        assert window.step(WeekDirection.BACKWARD).start_date == date(2024, 12, 2)

    def test_forward_then_backward_is_identity(self, window):
        stepped = window.step(WeekDirection.FORWARD).step(WeekDirection.BACKWARD)
        assert stepped == window

    def test_round_trip_over_many_weeks(self):
        start = WeekWindow.canonicalize(date(2024, 1, 1))
        window = start
        for _ in range(60):
            window = window.next()
        for _ in range(60):
            window = window.previous()
        assert window == start

    def test_stepping_returns_new_window(self, window):
        stepped = window.next()
        assert stepped is not window
        assert window.start_date == date(2024, 12, 9)

    def test_step_across_year(self):
        window = WeekWindow.canonicalize(date(2024, 12, 30))
        assert window.previous().start_date == date(2024, 12, 23)
        assert window.next().start_date == date(2025, 1, 6)


class TestDisplay:
    """Tests for formatting and day lookups."""

    def test_display_range(self):
        window = WeekWindow.canonicalize(date(2024, 12, 11))
        assert window.display_range() == "9 Dec – 15 Dec 2024"

    def test_display_range_uses_last_day_year(self):
        window = WeekWindow.canonicalize(date(2025, 1, 1))
        assert window.display_range() == "30 Dec – 5 Jan 2025"

    def test_iso_start(self):
        window = WeekWindow.canonicalize(date(2024, 12, 11))
        assert window.iso_start == "2024-12-09"

    def test_day_index(self):
        window = WeekWindow.canonicalize(date(2024, 12, 11))
        assert window.day_index(date(2024, 12, 9)) == 0
        assert window.day_index(datetime(2024, 12, 15, 8, 0)) == 6

    def test_day_index_outside_window(self):
        window = WeekWindow.canonicalize(date(2024, 12, 11))
        with pytest.raises(ValueError):
            window.day_index(date(2024, 12, 16))
        assert not window.contains(date(2024, 12, 8))
