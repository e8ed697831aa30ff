from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum

from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.application.utils.range_computer import shift_focus
from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.calendar_range import CalendarRange, CalendarView
from salon_calendar.domain.entities.selection_state import CategoryFilter, Mode, SelectionState

DEFAULT_LIST_SPAN_DAYS = 7


class Effect(str, Enum):
    fetch_calendar = "fetch_calendar"
    fetch_list = "fetch_list"
    reload_staff_options = "reload_staff_options"
    hydrate_edit_staff = "hydrate_edit_staff"


@dataclass(frozen=True)
class SelectionResult:
    """Result of a selection transition."""

    updated_state: SelectionState
    effects: tuple[Effect, ...] = ()


def initial_state(today: date) -> SelectionState:
    """List mode, month view focused on today, no selections."""
    return SelectionState(
        focus_date=today,
        mode=Mode.list,
        view=CalendarView.month,
        list_start=today,
        list_end=today + timedelta(days=DEFAULT_LIST_SPAN_DAYS),
    )


def switch_mode(state: SelectionState, mode: Mode | str) -> SelectionResult:
    mode = Mode(mode)
    updated = replace(state, mode=mode)
    return SelectionResult(
        updated_state=updated,
        effects=(Effect.reload_staff_options, _fetch_effect(updated)),
    )


def switch_view(state: SelectionState, view: CalendarView | str, calendar: LocalCalendar) -> SelectionResult:
    updated = replace(
        state,
        view=CalendarView(view),
        selected_day_key=calendar.day_key(state.focus_date),
        selected_appointment_id=None,
    )
    return SelectionResult(updated_state=updated, effects=(Effect.fetch_calendar,))


def change_category(state: SelectionState, category: CategoryFilter | str) -> SelectionResult:
    updated = replace(state, category=CategoryFilter(category), selected_appointment_id=None)
    return SelectionResult(
        updated_state=updated,
        effects=(Effect.reload_staff_options, _fetch_effect(updated)),
    )


def change_staff(state: SelectionState, staff_id: str | None, calendar: LocalCalendar) -> SelectionResult:
    staff_id = (staff_id or "").strip() or None
    if staff_id == "all":
        staff_id = None
    updated = replace(
        state,
        staff_id=staff_id,
        selected_appointment_id=None,
        selected_day_key=calendar.day_key(state.focus_date),
    )
    return SelectionResult(updated_state=updated, effects=(_fetch_effect(updated),))


def navigate(state: SelectionState, direction: int, calendar: LocalCalendar) -> SelectionResult:
    """prev (-1) / next (+1) by one unit of the current view."""
    return _refocus(state, shift_focus(state.view, state.focus_date, direction), calendar)


def go_today(state: SelectionState, today: date, calendar: LocalCalendar) -> SelectionResult:
    return _refocus(state, today, calendar)


def pick_date(state: SelectionState, day: date, calendar: LocalCalendar) -> SelectionResult:
    return _refocus(state, day, calendar)


def set_list_range(state: SelectionState, start: date, end: date) -> SelectionResult:
    """Inclusive list-mode date range; the fetch sends end + 1 day as exclusive bound."""
    updated = replace(state, list_start=start, list_end=end)
    return SelectionResult(updated_state=updated, effects=(Effect.fetch_list,))


def apply_fetch_result(
    state: SelectionState,
    calendar_range: CalendarRange,
    calendar: LocalCalendar,
    range_changed: bool = True,
) -> SelectionResult:
    """
    Keep the selection sane after a committed calendar fetch.

    The selected day falls back to the focus day when unset or outside the
    range. Appointment selection and editing survive only a same-range refresh.
    """
    selected_day_key = state.selected_day_key
    if not selected_day_key or not calendar.day_key_in_range(selected_day_key, calendar_range):
        selected_day_key = calendar.day_key(state.focus_date)

    updated = replace(state, selected_day_key=selected_day_key)
    if range_changed:
        updated = replace(updated, selected_appointment_id=None, editing_appointment_id=None)
    return SelectionResult(updated_state=updated)


def select_day(state: SelectionState, day_key: str) -> SelectionResult:
    return SelectionResult(
        updated_state=replace(state, selected_day_key=day_key, selected_appointment_id=None)
    )


def select_appointment(state: SelectionState, appointment: Appointment, calendar: LocalCalendar) -> SelectionResult:
    return SelectionResult(
        updated_state=replace(
            state,
            selected_day_key=calendar.day_key(appointment.starts_at),
            selected_appointment_id=appointment.id,
        )
    )


def toggle_edit(state: SelectionState, appointment: Appointment) -> SelectionResult:
    closing = state.editing_appointment_id == appointment.id
    updated = replace(
        state,
        editing_appointment_id=None if closing else appointment.id,
        selected_appointment_id=appointment.id,
    )
    effects = () if closing else (Effect.hydrate_edit_staff,)
    return SelectionResult(updated_state=updated, effects=effects)


def after_update(state: SelectionState) -> SelectionResult:
    return SelectionResult(
        updated_state=replace(state, editing_appointment_id=None),
        effects=(Effect.fetch_calendar,),
    )


def after_cancel(state: SelectionState) -> SelectionResult:
    return SelectionResult(
        updated_state=replace(state, editing_appointment_id=None, selected_appointment_id=None),
        effects=(Effect.fetch_calendar,),
    )


def _refocus(state: SelectionState, focus_date: date, calendar: LocalCalendar) -> SelectionResult:
    updated = replace(
        state,
        focus_date=focus_date,
        selected_day_key=calendar.day_key(focus_date),
        selected_appointment_id=None,
    )
    return SelectionResult(updated_state=updated, effects=(Effect.fetch_calendar,))


def _fetch_effect(state: SelectionState) -> Effect:
    return Effect.fetch_list if state.mode == Mode.list else Effect.fetch_calendar
