"""
Tests for render-ready view models and Turkish labels.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from salon_calendar.application.use_cases import selection
from salon_calendar.application.utils.labels import format_long_day, format_short_day
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.application.utils.range_computer import compute_range
from salon_calendar.application.utils.view_model import (
    MIN_EVENT_HEIGHT_PX,
    NO_APPOINTMENTS_IN_RANGE,
    NO_APPOINTMENTS_ON_DAY,
    NO_DAY_SELECTED,
    build_calendar_view,
    build_day_details,
    build_event_title,
    build_hour_labels,
    build_list_view,
    build_month_cells,
)
from salon_calendar.domain.entities.appointment import Appointment, AppointmentStatus, Category
from salon_calendar.domain.entities.calendar_range import CalendarView
from salon_calendar.domain.entities.layout_event import DisplayWindow
from salon_calendar.domain.entities.selection_state import Mode


CAL = LocalCalendar()
WINDOW = DisplayWindow()


def _state(**changes):
    return replace(selection.initial_state(date(2024, 3, 1)), mode=Mode.calendar, **changes)


def _appt(appointment_id: str, day: str, start: str, end: str, **kwargs) -> Appointment:
    return Appointment(
        id=appointment_id,
        category=kwargs.pop("category", Category.women),
        starts_at=CAL.time_on_day(day, start),
        ends_at=CAL.time_on_day(day, end),
        customer_full_name=kwargs.pop("customer_full_name", "Elif"),
        **kwargs,
    )


def test_labels():
    """Weekday and month names are Turkish, Monday first."""
    assert format_short_day(date(2024, 2, 1)) == "Per 01.02"
    assert format_long_day(date(2024, 2, 1)) == "Perşembe, 01 Şubat 2024"


def test_event_title():
    """Category prefix, local time, customer and optional staff."""
    assert build_event_title(_appt("a", "2024-03-01", "09:00", "10:00"), CAL) == "K 09:00 Elif"
    with_staff = _appt("b", "2024-03-01", "09:05", "10:00", category=Category.men, staff_full_name="Mehmet")
    assert build_event_title(with_staff, CAL) == "E 09:05 Elif • Mehmet"
    nameless = _appt("c", "2024-03-01", "09:00", "10:00", customer_full_name=None)
    assert build_event_title(nameless, CAL) == "K 09:00 -"


def test_month_cells_cap_chips():
    """Busy days show the first chips plus a 'more' counter."""
    appointments = [_appt(str(i), "2024-03-05", f"{9 + i:02d}:00", f"{9 + i:02d}:30") for i in range(5)]
    month = compute_range(CalendarView.month, date(2024, 3, 1), CAL)
    cells = build_month_cells(month, appointments, _state(selected_day_key="2024-03-05"), CAL, max_chips=3)
    cell = next(c for c in cells if c.day_key == "2024-03-05")
    assert len(cell.chips) == 3
    assert cell.more == 2
    assert cell.selected
    assert cell.chips[0].startswith("K 09:00")
    assert cells[0].day_key == "2024-02-26"
    assert cells[0].day_number == 26


def test_week_columns_skip_cancelled_and_enforce_min_height():
    """Only booked appointments are placed; short ones still get a readable box."""
    week = compute_range(CalendarView.week, date(2024, 3, 1), CAL)
    appointments = [
        _appt("short", "2024-03-01", "09:00", "09:05"),
        _appt("gone", "2024-03-01", "10:00", "11:00", status=AppointmentStatus.cancelled),
    ]
    model = build_calendar_view(week, appointments, _state(view=CalendarView.week), CAL, WINDOW)
    assert [c.header for c in model.columns][0] == "Pzt 26.02"
    friday = next(c for c in model.columns if c.day_key == "2024-03-01")
    assert [e.layout.appointment.id for e in friday.events] == ["short"]
    event = friday.events[0]
    assert event.top_px == 60
    assert event.height_px == MIN_EVENT_HEIGHT_PX
    assert event.width_css == "calc((100% - 0px) / 1)"
    assert model.hour_labels[0] == "08:00"
    assert model.hour_labels[-1] == "20:00"


def test_hour_labels_follow_window():
    """One label per hour including the closing hour."""
    assert build_hour_labels(DisplayWindow(9, 12)) == ("09:00", "10:00", "11:00", "12:00")


def test_day_details():
    """Details list the day's appointments with time ranges and flags."""
    appointments = [
        _appt("a", "2024-03-01", "09:00", "09:30"),
        _appt("b", "2024-03-01", "11:00", "11:30", status=AppointmentStatus.completed),
    ]
    state = _state(selected_appointment_id="a", editing_appointment_id="a")
    details = build_day_details("2024-03-01", appointments, state, CAL)
    assert details.title == "Cuma, 01 Mart 2024"
    assert details.count_label == "2 randevu"
    assert details.items[0].time_range == "09:00 - 09:30"
    assert details.items[0].editing
    assert not details.items[1].editable

    assert build_day_details(None, appointments, state, CAL).placeholder == NO_DAY_SELECTED
    assert build_day_details("2024-03-02", appointments, state, CAL).placeholder == NO_APPOINTMENTS_ON_DAY


def test_list_view_splits_categories():
    """List mode groups men and women separately by day."""
    appointments = [
        _appt("w1", "2024-03-02", "09:00", "09:30"),
        _appt("m1", "2024-03-01", "10:00", "10:30", category=Category.men),
        _appt("w2", "2024-03-01", "12:00", "12:30"),
    ]
    model = build_list_view(appointments, CAL)
    assert model.status_label == "3 randevu"
    assert [d.day_key for d in model.women] == ["2024-03-01", "2024-03-02"]
    assert [a.id for a in model.men[0].items] == ["m1"]
    assert build_list_view([], CAL).empty_message == NO_APPOINTMENTS_IN_RANGE
