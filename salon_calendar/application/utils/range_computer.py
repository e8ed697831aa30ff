from __future__ import annotations

from datetime import date, timedelta

from salon_calendar.application.utils.labels import (
    format_day_label,
    format_month_label,
    format_range_label,
)
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.domain.entities.calendar_range import CalendarRange, CalendarView

MONTH_GRID_DAYS = 42  # 6 full weeks, fixed 7x6 grid
WEEK_DAYS = 7


def compute_range(view: CalendarView | str, focus_date: date, calendar: LocalCalendar) -> CalendarRange:
    """Visible [start, end) instant range and label for a view centered on focus_date."""
    view = CalendarView(view)

    if view == CalendarView.month:
        first_of_month = calendar.start_of_local_day(date(focus_date.year, focus_date.month, 1))
        start = calendar.start_of_week(first_of_month)
        end = calendar.add_days(start, MONTH_GRID_DAYS)
        return CalendarRange(start=start, end=end, label=format_month_label(focus_date))

    if view == CalendarView.week:
        start = calendar.start_of_week(calendar.start_of_local_day(focus_date))
        end = calendar.add_days(start, WEEK_DAYS)
        first = calendar.local_date(start)
        last = calendar.local_date(calendar.add_days(end, -1))
        return CalendarRange(start=start, end=end, label=format_range_label(first, last))

    start = calendar.start_of_local_day(focus_date)
    end = calendar.end_exclusive_of_day(start)
    return CalendarRange(start=start, end=end, label=format_day_label(focus_date))


def shift_focus(view: CalendarView | str, focus_date: date, direction: int) -> date:
    """Move the focus date by one unit of the view (month, 7 days or 1 day)."""
    view = CalendarView(view)
    direction = 1 if direction > 0 else -1

    if view == CalendarView.month:
        # Calendar-field arithmetic; always lands on the 1st.
        month_index = focus_date.year * 12 + (focus_date.month - 1) + direction
        return date(month_index // 12, month_index % 12 + 1, 1)

    if view == CalendarView.week:
        return focus_date + timedelta(days=7 * direction)

    return focus_date + timedelta(days=direction)


def range_day_keys(calendar_range: CalendarRange, calendar: LocalCalendar) -> list[str]:
    """Day keys covered by a range, in order."""
    first = calendar.local_date(calendar_range.start)
    return [calendar.day_key(first + timedelta(days=i)) for i in range(calendar_range.days)]
