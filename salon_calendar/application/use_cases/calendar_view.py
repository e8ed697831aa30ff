from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Hashable

from salon_calendar.application.exceptions import NetworkFailure
from salon_calendar.application.ports.admin_api import AdminApiPort
from salon_calendar.application.use_cases import selection
from salon_calendar.application.use_cases.edit_appointment import (
    AppointmentEditUseCase,
    EditForm,
    EditResult,
)
from salon_calendar.application.use_cases.selection import Effect, SelectionResult
from salon_calendar.application.use_cases.staff_options import StaffOptionsUseCase
from salon_calendar.application.utils.grouping import filter_visible
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.application.utils.range_computer import compute_range
from salon_calendar.application.utils.view_model import (
    CALENDAR_LOAD_ERROR,
    LIST_LOAD_ERROR,
    CalendarViewModel,
    ListViewModel,
    build_calendar_error,
    build_calendar_view,
    build_list_error,
    build_list_view,
)
from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.calendar_range import CalendarRange, CalendarView
from salon_calendar.domain.entities.layout_event import DisplayWindow
from salon_calendar.domain.entities.selection_state import CategoryFilter, Mode, SelectionState
from salon_calendar.domain.entities.staff_option import StaffOption

LOADING_LABEL = "Yükleniyor…"

_CALENDAR = "calendar"
_LIST = "list"
_STAFF = "staff"
_EDIT_STAFF = "edit_staff"


class CalendarViewUseCase:
    """
    Owns the admin calendar SelectionState and drives fetch -> layout.

    Every fetch is stamped with a sequence number. A completion is committed
    only when it is still the latest fetch of its kind and the state still
    asks for the same range and filters; anything else is discarded.
    """

    def __init__(
        self,
        api: AdminApiPort,
        calendar: LocalCalendar,
        staff_options: StaffOptionsUseCase,
        edit: AppointmentEditUseCase,
        window: DisplayWindow | None = None,
        today: date | None = None,
        lane_gap_px: int = 6,
        month_max_chips: int = 3,
    ) -> None:
        self._api = api
        self._calendar = calendar
        self._staff = staff_options
        self._edit = edit
        self._window = window or DisplayWindow()
        self._lane_gap_px = lane_gap_px
        self._month_max_chips = month_max_chips
        self._logger = logging.getLogger(__name__)

        self._state = selection.initial_state(today or calendar.today())
        self._started = False
        self._seq = 0
        self._latest: dict[str, int] = {}

        self._range: CalendarRange | None = None
        self._appointments: list[Appointment] = []
        self._calendar_error: str | None = None
        self._list_appointments: list[Appointment] = []
        self._list_error: str | None = None
        self._staff_options: list[StaffOption] = []
        self._edit_staff_options: list[StaffOption] = []

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def committed_range(self) -> CalendarRange | None:
        return self._range

    @property
    def appointments(self) -> list[Appointment]:
        return list(self._appointments)

    @property
    def list_appointments(self) -> list[Appointment]:
        return list(self._list_appointments)

    @property
    def staff_options(self) -> list[StaffOption]:
        return list(self._staff_options)

    @property
    def edit_staff_options(self) -> list[StaffOption]:
        return list(self._edit_staff_options)

    def visible_appointments(self) -> list[Appointment]:
        return filter_visible(self._appointments, self._state)

    @property
    def started(self) -> bool:
        return self._started

    async def start(self) -> None:
        """Initial load for the starting mode."""
        self._started = True
        await self.apply(selection.switch_mode(self._state, self._state.mode))

    async def apply(self, result: SelectionResult, appointment: Appointment | None = None) -> None:
        self._state = result.updated_state
        for effect in result.effects:
            if effect == Effect.reload_staff_options:
                await self.reload_staff_options()
            elif effect == Effect.fetch_calendar:
                await self.load_calendar()
            elif effect == Effect.fetch_list:
                await self.load_list()
            elif effect == Effect.hydrate_edit_staff and appointment is not None:
                await self._hydrate_edit_staff(appointment)

    # User actions

    async def switch_mode(self, mode: Mode | str) -> None:
        await self.apply(selection.switch_mode(self._state, mode))

    async def switch_view(self, view: CalendarView | str) -> None:
        await self.apply(selection.switch_view(self._state, view, self._calendar))

    async def change_category(self, category: CategoryFilter | str) -> None:
        await self.apply(selection.change_category(self._state, category))

    async def change_staff(self, staff_id: str | None) -> None:
        await self.apply(selection.change_staff(self._state, staff_id, self._calendar))

    async def navigate(self, direction: int) -> None:
        await self.apply(selection.navigate(self._state, direction, self._calendar))

    async def go_today(self, now: datetime | None = None) -> None:
        await self.apply(selection.go_today(self._state, self._calendar.today(now), self._calendar))

    async def pick_date(self, day: date) -> None:
        await self.apply(selection.pick_date(self._state, day, self._calendar))

    async def set_list_range(self, start: date, end: date) -> None:
        await self.apply(selection.set_list_range(self._state, start, end))

    def select_day(self, day_key: str) -> None:
        self._state = selection.select_day(self._state, day_key).updated_state

    def select_appointment(self, appointment_id: str) -> bool:
        appointment = self._find_visible(appointment_id)
        if appointment is None:
            return False
        self._state = selection.select_appointment(self._state, appointment, self._calendar).updated_state
        return True

    async def toggle_edit(self, appointment_id: str) -> bool:
        appointment = self._find_visible(appointment_id)
        if appointment is None:
            return False
        await self.apply(selection.toggle_edit(self._state, appointment), appointment=appointment)
        return True

    async def submit_edit(self, form: EditForm) -> EditResult:
        appointment_id = self._state.editing_appointment_id
        if not appointment_id:
            return EditResult(ok=False)
        appointment = self._find_visible(appointment_id)
        day_key = self._calendar.day_key(appointment.starts_at) if appointment else self._state.selected_day_key

        result = await self._edit.submit_update(appointment_id, day_key, form)
        if result.ok:
            await self.apply(selection.after_update(self._state))
        return result

    async def cancel_appointment(self, appointment_id: str, reason: str | None = None) -> EditResult:
        result = await self._edit.cancel(appointment_id, reason)
        if result.ok:
            await self.apply(selection.after_cancel(self._state))
        return result

    # Fetch pipeline

    async def refresh(self) -> bool:
        """Re-run fetch -> layout for the active mode, keeping selection and editing."""
        if self._state.mode == Mode.list:
            return await self.load_list()
        return await self.load_calendar(preserve_selection=True)

    async def load_calendar(self, preserve_selection: bool = False) -> bool:
        state = self._state
        calendar_range = compute_range(state.view, state.focus_date, self._calendar)
        seq = self._issue(_CALENDAR)
        self._logger.debug(
            "Calendar fetch issued",
            extra={"seq": seq, "view": state.view.value, "range_start": calendar_range.start.isoformat()},
        )

        try:
            appointments = await self._api.fetch_appointments(
                calendar_range.start,
                calendar_range.end,
                category=state.category_param,
                staff_id=state.staff_id,
                include_past=False,
            )
        except NetworkFailure as e:
            if not self._is_current(_CALENDAR, seq, self._calendar_key(state)):
                return False
            self._logger.warning("Calendar fetch failed", extra={"seq": seq, "error": str(e)})
            self._calendar_error = CALENDAR_LOAD_ERROR
            self._range = None
            self._appointments = []
            return False

        if not self._is_current(_CALENDAR, seq, self._calendar_key(state)):
            self._logger.debug("Discarding stale calendar fetch", extra={"seq": seq})
            return False

        range_changed = not preserve_selection or self._range != calendar_range
        self._state = selection.apply_fetch_result(
            self._state, calendar_range, self._calendar, range_changed=range_changed
        ).updated_state
        self._range = calendar_range
        self._appointments = list(appointments)
        self._calendar_error = None
        self._logger.info(
            "Calendar loaded",
            extra={"seq": seq, "view": state.view.value, "range_start": calendar_range.start.isoformat()},
        )
        return True

    async def load_list(self) -> bool:
        state = self._state
        if not state.list_start or not state.list_end:
            return False
        # The list end date is inclusive for the user; the API takes an exclusive end.
        start = self._calendar.start_of_local_day(state.list_start)
        end = self._calendar.add_days(self._calendar.start_of_local_day(state.list_end), 1)
        seq = self._issue(_LIST)

        try:
            appointments = await self._api.fetch_appointments(
                start,
                end,
                staff_id=state.staff_id,
                include_past=True,
            )
        except NetworkFailure as e:
            if not self._is_current(_LIST, seq, self._list_key(state)):
                return False
            self._logger.warning("List fetch failed", extra={"seq": seq, "error": str(e)})
            self._list_error = LIST_LOAD_ERROR
            self._list_appointments = []
            return False

        if not self._is_current(_LIST, seq, self._list_key(state)):
            self._logger.debug("Discarding stale list fetch", extra={"seq": seq})
            return False

        self._list_appointments = list(appointments)
        self._list_error = None
        return True

    async def reload_staff_options(self) -> bool:
        scope = "all" if self._state.mode == Mode.list else self._state.category.value
        seq = self._issue(_STAFF)
        try:
            options = await self._staff.options_for_scope(scope)
        except NetworkFailure as e:
            self._logger.warning("Staff options unavailable", extra={"seq": seq, "error": str(e)})
            options = []

        if self._latest.get(_STAFF) != seq:
            self._logger.debug("Discarding stale staff options", extra={"seq": seq})
            return False
        self._staff_options = options
        staff_id = self._state.staff_id
        if staff_id and not any(str(o.id) == str(staff_id) for o in options):
            self._state = replace(self._state, staff_id=None)
        return True

    # Rendering inputs

    def calendar_view_model(self) -> CalendarViewModel:
        if self._calendar_error:
            return build_calendar_error(self._state.view)
        if self._range is None:
            return CalendarViewModel(view=self._state.view, label=LOADING_LABEL, range=None)
        return build_calendar_view(
            self._range,
            self.visible_appointments(),
            self._state,
            self._calendar,
            self._window,
            gap_px=self._lane_gap_px,
            max_chips=self._month_max_chips,
        )

    def list_view_model(self) -> ListViewModel:
        if self._list_error:
            return build_list_error()
        return build_list_view(self._list_appointments, self._calendar)

    def _issue(self, kind: str) -> int:
        self._seq += 1
        self._latest[kind] = self._seq
        return self._seq

    def _is_current(self, kind: str, seq: int, request_key: Hashable) -> bool:
        if self._latest.get(kind) != seq:
            return False
        current_key = self._calendar_key(self._state) if kind == _CALENDAR else self._list_key(self._state)
        return current_key == request_key

    def _calendar_key(self, state: SelectionState) -> Hashable:
        calendar_range = compute_range(state.view, state.focus_date, self._calendar)
        return (calendar_range.start, calendar_range.end, state.category, state.staff_id)

    def _list_key(self, state: SelectionState) -> Hashable:
        return (state.list_start, state.list_end, state.staff_id)

    def _find_visible(self, appointment_id: str) -> Appointment | None:
        return next((a for a in self.visible_appointments() if a.id == appointment_id), None)

    async def _hydrate_edit_staff(self, appointment: Appointment) -> None:
        seq = self._issue(_EDIT_STAFF)
        try:
            options = await self._staff.fetch(appointment.category.value)
        except NetworkFailure as e:
            self._logger.error("Edit staff options unavailable", extra={"appointment_id": appointment.id, "error": str(e)})
            options = []

        if self._latest.get(_EDIT_STAFF) != seq or self._state.editing_appointment_id != appointment.id:
            self._logger.debug("Discarding stale edit staff options", extra={"seq": seq, "appointment_id": appointment.id})
            return
        self._edit_staff_options = options
