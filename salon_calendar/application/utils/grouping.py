from __future__ import annotations

from typing import Iterable

from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.selection_state import CategoryFilter, SelectionState


def appointment_day_key(appointment: Appointment, calendar: LocalCalendar) -> str:
    return calendar.day_key(appointment.starts_at)


def group_by_day(appointments: Iterable[Appointment], calendar: LocalCalendar) -> dict[str, list[Appointment]]:
    """Appointments keyed by local day, each day sorted by start; keys in ascending order."""
    grouped: dict[str, list[Appointment]] = {}
    for appt in appointments:
        grouped.setdefault(appointment_day_key(appt, calendar), []).append(appt)
    return {key: sorted(grouped[key], key=lambda a: a.starts_at) for key in sorted(grouped)}


def filter_visible(appointments: Iterable[Appointment], state: SelectionState) -> list[Appointment]:
    """Apply the category and staff filters client-side."""
    out = list(appointments)
    if state.category != CategoryFilter.all:
        out = [a for a in out if a.category.value == state.category.value]
    if state.staff_id:
        out = [a for a in out if str(a.staff_id or "") == str(state.staff_id)]
    return out


def appointments_on_day(
    appointments: Iterable[Appointment],
    day_key: str,
    calendar: LocalCalendar,
) -> list[Appointment]:
    items = [a for a in appointments if appointment_day_key(a, calendar) == day_key]
    return sorted(items, key=lambda a: a.starts_at)
