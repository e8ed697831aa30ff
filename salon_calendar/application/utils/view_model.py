from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Sequence

from salon_calendar.application.utils.grouping import appointments_on_day, group_by_day
from salon_calendar.application.utils.labels import (
    CATEGORY_PREFIX,
    WEEKDAY_SHORT_TR,
    format_long_day,
    format_short_day,
)
from salon_calendar.application.utils.local_calendar import LocalCalendar, parse_day_key
from salon_calendar.application.utils.overlap_layout import layout_day
from salon_calendar.domain.entities.appointment import Appointment, Category
from salon_calendar.domain.entities.calendar_range import CalendarRange, CalendarView
from salon_calendar.domain.entities.layout_event import DisplayWindow, LayoutEvent
from salon_calendar.domain.entities.selection_state import SelectionState

MIN_EVENT_HEIGHT_PX = 18

CALENDAR_LOAD_ERROR = "Takvim yüklenemedi."
DAY_DETAILS_LOAD_ERROR = "Gün detayı yüklenemedi."
LIST_LOAD_ERROR = "Randevular getirilemedi."
NO_DAY_SELECTED = "Bir gün seçin."
NO_APPOINTMENTS_ON_DAY = "Bu günde randevu yok."
NO_APPOINTMENTS_IN_RANGE = "Bu aralıkta randevu yok."


@dataclass(frozen=True)
class MonthCell:
    day_key: str
    day_number: int
    selected: bool
    chips: tuple[str, ...]
    more: int


@dataclass(frozen=True)
class PositionedEvent:
    layout: LayoutEvent
    day_key: str
    title: str
    top_px: int
    height_px: int
    left_css: str
    width_css: str
    selected: bool


@dataclass(frozen=True)
class DayColumn:
    day_key: str
    header: str
    selected: bool
    events: tuple[PositionedEvent, ...]


@dataclass(frozen=True)
class DayDetailItem:
    appointment: Appointment
    time_range: str
    selected: bool
    editing: bool
    editable: bool


@dataclass(frozen=True)
class DayDetails:
    day_key: str | None
    title: str
    count_label: str
    items: tuple[DayDetailItem, ...] = ()
    placeholder: str | None = None


@dataclass(frozen=True)
class CalendarViewModel:
    view: CalendarView
    label: str
    range: CalendarRange | None
    weekday_headers: tuple[str, ...] = WEEKDAY_SHORT_TR
    month_cells: tuple[MonthCell, ...] = ()
    hour_labels: tuple[str, ...] = ()
    columns: tuple[DayColumn, ...] = ()
    details: DayDetails | None = None
    error: str | None = None


@dataclass(frozen=True)
class ListDay:
    day_key: str
    items: tuple[Appointment, ...]


@dataclass(frozen=True)
class ListViewModel:
    status_label: str
    men: tuple[ListDay, ...] = ()
    women: tuple[ListDay, ...] = ()
    empty_message: str | None = None
    error: str | None = field(default=None)


def build_event_title(appointment: Appointment, calendar: LocalCalendar) -> str:
    """'E 09:00 Ayşe Yılmaz • Mehmet'"""
    who = appointment.customer_full_name or "-"
    staff = f" • {appointment.staff_full_name}" if appointment.staff_full_name else ""
    prefix = CATEGORY_PREFIX.get(appointment.category.value, "K")
    return f"{prefix} {calendar.format_hhmm(appointment.starts_at)} {who}{staff}"


def build_month_cells(
    calendar_range: CalendarRange,
    appointments: Sequence[Appointment],
    state: SelectionState,
    calendar: LocalCalendar,
    max_chips: int = 3,
) -> tuple[MonthCell, ...]:
    by_day = group_by_day(appointments, calendar)
    first = calendar.local_date(calendar_range.start)
    cells: list[MonthCell] = []
    for i in range(calendar_range.days):
        day = first + timedelta(days=i)
        key = calendar.day_key(day)
        items = by_day.get(key, [])
        cells.append(
            MonthCell(
                day_key=key,
                day_number=day.day,
                selected=state.selected_day_key == key,
                chips=tuple(build_event_title(a, calendar) for a in items[:max_chips]),
                more=max(0, len(items) - max_chips),
            )
        )
    return tuple(cells)


def build_day_columns(
    calendar_range: CalendarRange,
    appointments: Sequence[Appointment],
    state: SelectionState,
    calendar: LocalCalendar,
    window: DisplayWindow,
    gap_px: int = 6,
    px_per_minute: int = 1,
) -> tuple[DayColumn, ...]:
    """Week/day columns; only booked appointments are placed on the time grid."""
    by_day = group_by_day(appointments, calendar)
    first = calendar.local_date(calendar_range.start)
    columns: list[DayColumn] = []
    for i in range(calendar_range.days):
        day = first + timedelta(days=i)
        key = calendar.day_key(day)
        booked = [a for a in by_day.get(key, []) if a.is_booked]
        events = tuple(
            _position_event(ev, key, state, calendar, gap_px, px_per_minute)
            for ev in layout_day(booked, window, calendar)
        )
        columns.append(
            DayColumn(
                day_key=key,
                header=format_short_day(day),
                selected=state.selected_day_key == key,
                events=events,
            )
        )
    return tuple(columns)


def build_hour_labels(window: DisplayWindow) -> tuple[str, ...]:
    return tuple(f"{h:02d}:00" for h in range(window.start_hour, window.end_hour + 1))


def build_day_details(
    day_key: str | None,
    appointments: Sequence[Appointment],
    state: SelectionState,
    calendar: LocalCalendar,
) -> DayDetails:
    if not day_key:
        return DayDetails(day_key=None, title="", count_label="", placeholder=NO_DAY_SELECTED)

    items = appointments_on_day(appointments, day_key, calendar)
    title = format_long_day(parse_day_key(day_key))
    count_label = f"{len(items)} randevu"
    if not items:
        return DayDetails(day_key=day_key, title=title, count_label=count_label, placeholder=NO_APPOINTMENTS_ON_DAY)

    return DayDetails(
        day_key=day_key,
        title=title,
        count_label=count_label,
        items=tuple(
            DayDetailItem(
                appointment=a,
                time_range=f"{calendar.format_hhmm(a.starts_at)} - {calendar.format_hhmm(a.ends_at)}",
                selected=state.selected_appointment_id == a.id,
                editing=state.editing_appointment_id == a.id,
                editable=a.is_booked,
            )
            for a in items
        ),
    )


def build_calendar_view(
    calendar_range: CalendarRange,
    appointments: Sequence[Appointment],
    state: SelectionState,
    calendar: LocalCalendar,
    window: DisplayWindow,
    gap_px: int = 6,
    max_chips: int = 3,
) -> CalendarViewModel:
    if state.view == CalendarView.month:
        return CalendarViewModel(
            view=state.view,
            label=calendar_range.label,
            range=calendar_range,
            month_cells=build_month_cells(calendar_range, appointments, state, calendar, max_chips),
            details=build_day_details(state.selected_day_key, appointments, state, calendar),
        )

    return CalendarViewModel(
        view=state.view,
        label=calendar_range.label,
        range=calendar_range,
        hour_labels=build_hour_labels(window),
        columns=build_day_columns(calendar_range, appointments, state, calendar, window, gap_px),
        details=build_day_details(state.selected_day_key, appointments, state, calendar),
    )


def build_calendar_error(view: CalendarView, label: str = "Yükleme hatası") -> CalendarViewModel:
    return CalendarViewModel(
        view=view,
        label=label,
        range=None,
        details=DayDetails(day_key=None, title="", count_label="", placeholder=DAY_DETAILS_LOAD_ERROR),
        error=CALENDAR_LOAD_ERROR,
    )


def build_list_view(appointments: Sequence[Appointment], calendar: LocalCalendar) -> ListViewModel:
    """List mode splits appointments into men / women columns grouped by day."""
    men = [a for a in appointments if a.category == Category.men]
    women = [a for a in appointments if a.category == Category.women]
    return ListViewModel(
        status_label=f"{len(appointments)} randevu",
        men=_list_days(men, calendar),
        women=_list_days(women, calendar),
        empty_message=None if appointments else NO_APPOINTMENTS_IN_RANGE,
    )


def build_list_error() -> ListViewModel:
    return ListViewModel(status_label="Yükleme hatası", error=LIST_LOAD_ERROR)


def _list_days(appointments: Sequence[Appointment], calendar: LocalCalendar) -> tuple[ListDay, ...]:
    return tuple(ListDay(day_key=k, items=tuple(v)) for k, v in group_by_day(appointments, calendar).items())


def _position_event(
    ev: LayoutEvent,
    day_key: str,
    state: SelectionState,
    calendar: LocalCalendar,
    gap_px: int,
    px_per_minute: int,
) -> PositionedEvent:
    lanes = max(1, ev.lane_count)
    lane = max(0, min(ev.lane, lanes - 1))
    width_css = f"calc((100% - {(lanes - 1) * gap_px}px) / {lanes})"
    left_css = f"calc({lane} * ((100% - {(lanes - 1) * gap_px}px) / {lanes} + {gap_px}px))"
    return PositionedEvent(
        layout=ev,
        day_key=day_key,
        title=build_event_title(ev.appointment, calendar),
        top_px=ev.start_minute * px_per_minute,
        height_px=max(MIN_EVENT_HEIGHT_PX, (ev.end_minute - ev.start_minute) * px_per_minute),
        left_css=left_css,
        width_css=width_css,
        selected=state.selected_appointment_id == ev.appointment.id,
    )
