from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from salon_calendar.api.v1.schemas import (
    LayoutEventSchema,
    LayoutRequestSchema,
    LayoutResponseSchema,
    RangeResponseSchema,
)
from salon_calendar.application.utils.grouping import group_by_day
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.application.utils.overlap_layout import layout_day
from salon_calendar.application.utils.range_computer import compute_range, range_day_keys
from salon_calendar.domain.entities.calendar_range import CalendarView
from salon_calendar.domain.entities.layout_event import DisplayWindow
from salon_calendar.wiring.dependencies import get_calendar, get_display_window

router = APIRouter()


@router.get("/calendar/range", response_model=RangeResponseSchema)
def calendar_range(
    view: CalendarView = Query(CalendarView.month),
    focus: date | None = Query(None),
    calendar: LocalCalendar = Depends(get_calendar),
):
    focus_date = focus or calendar.today()
    result = compute_range(view, focus_date, calendar)
    return RangeResponseSchema(
        view=view,
        focus=focus_date,
        start=result.start,
        end=result.end,
        label=result.label,
        days=result.days,
        day_keys=range_day_keys(result, calendar),
    )


@router.post("/calendar/layout", response_model=LayoutResponseSchema)
def calendar_layout(
    req: LayoutRequestSchema,
    calendar: LocalCalendar = Depends(get_calendar),
    default_window: DisplayWindow = Depends(get_display_window),
):
    window = (
        DisplayWindow(start_hour=req.window.start_hour, end_hour=req.window.end_hour)
        if req.window
        else default_window
    )
    appointments = [dto.to_entity() for dto in req.appointments]
    if any(a.ends_at < a.starts_at for a in appointments):
        raise HTTPException(status_code=400, detail="ends_at must not be before starts_at")

    events: list[LayoutEventSchema] = []
    for day_key, items in group_by_day(appointments, calendar).items():
        for ev in layout_day(items, window, calendar):
            events.append(
                LayoutEventSchema(
                    id=ev.appointment.id,
                    day_key=day_key,
                    start_minute=ev.start_minute,
                    end_minute=ev.end_minute,
                    lane=ev.lane,
                    lane_count=ev.lane_count,
                    left_px=ev.left_offset(req.gap_px, req.row_width_px),
                    width_px=ev.width_fraction(req.gap_px, req.row_width_px),
                )
            )
    return LayoutResponseSchema(events=events)
