"""
Tests for visible range computation and focus navigation.
"""

from __future__ import annotations

from datetime import date, timedelta

from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.application.utils.range_computer import compute_range, range_day_keys, shift_focus
from salon_calendar.domain.entities.calendar_range import CalendarView


CAL = LocalCalendar()


def test_month_range_starts_on_monday_before_first():
    """March 2024 starts on a Friday: grid runs 2024-02-26 .. 2024-04-08."""
    result = compute_range(CalendarView.month, date(2024, 3, 1), CAL)
    assert result.start == CAL.start_of_local_day("2024-02-26")
    assert result.end == CAL.start_of_local_day("2024-04-08")
    assert result.days == 42
    assert result.label == "Mart 2024"


def test_month_range_when_first_is_monday():
    """January 2024 starts on a Monday, so the grid starts on the 1st."""
    result = compute_range("month", date(2024, 1, 17), CAL)
    assert CAL.day_key(result.start) == "2024-01-01"
    assert result.label == "Ocak 2024"


def test_month_range_is_always_six_weeks():
    """Every month grid is 42 days, starts on Monday and contains the 1st in its first week."""
    for month in range(1, 13):
        first = date(2025, month, 1)
        result = compute_range(CalendarView.month, first, CAL)
        start_day = CAL.local_date(result.start)
        assert result.days == 42
        assert start_day.weekday() == 0
        assert start_day <= first < start_day + timedelta(days=7)


def test_week_range():
    """Week view covers Monday through Sunday with a dd.mm.yyyy label."""
    result = compute_range(CalendarView.week, date(2024, 3, 1), CAL)
    assert CAL.day_key(result.start) == "2024-02-26"
    assert CAL.day_key(result.end) == "2024-03-04"
    assert result.days == 7
    assert result.label == "26.02.2024 – 03.03.2024"
    keys = range_day_keys(result, CAL)
    assert keys[0] == "2024-02-26"
    assert keys[-1] == "2024-03-03"


def test_day_range():
    """Day view is a single local day."""
    result = compute_range(CalendarView.day, date(2024, 3, 1), CAL)
    assert result.start == CAL.start_of_local_day("2024-03-01")
    assert result.days == 1
    assert result.label == "01.03.2024"
    assert result.contains(CAL.time_on_day("2024-03-01", "23:59"))
    assert not result.contains(CAL.time_on_day("2024-03-02", "00:00"))


def test_shift_focus_month_lands_on_first():
    """Month navigation moves to the 1st of the neighbouring month."""
    assert shift_focus(CalendarView.month, date(2024, 1, 31), 1) == date(2024, 2, 1)
    assert shift_focus(CalendarView.month, date(2024, 1, 15), -1) == date(2023, 12, 1)
    assert shift_focus(CalendarView.month, date(2024, 12, 5), 1) == date(2025, 1, 1)


def test_shift_focus_week_and_day():
    """Week moves 7 days, day moves 1 day."""
    assert shift_focus(CalendarView.week, date(2024, 3, 1), 1) == date(2024, 3, 8)
    assert shift_focus(CalendarView.day, date(2024, 3, 1), -1) == date(2024, 2, 29)
