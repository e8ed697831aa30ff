from fastapi import APIRouter, Depends, HTTPException
from fastapi.encoders import jsonable_encoder

from salon_calendar.api.v1.schemas import (
    AppointmentRefSchema,
    CancelRequestSchema,
    CategoryRequestSchema,
    DateRequestSchema,
    EditResultSchema,
    EditSubmitSchema,
    ListRangeRequestSchema,
    ModeRequestSchema,
    NavigateRequestSchema,
    SelectDayRequestSchema,
    SessionResponseSchema,
    StaffRequestSchema,
    ViewRequestSchema,
)
from salon_calendar.application.use_cases.calendar_view import CalendarViewUseCase
from salon_calendar.application.use_cases.edit_appointment import EditForm, EditResult
from salon_calendar.domain.entities.selection_state import Mode
from salon_calendar.domain.entities.staff_option import StaffOption
from salon_calendar.wiring.dependencies import get_calendar_view

router = APIRouter(prefix="/calendar/session")


async def _started_view(view: CalendarViewUseCase = Depends(get_calendar_view)) -> CalendarViewUseCase:
    if not view.started:
        await view.start()
    return view


def _staff(options: list[StaffOption]) -> list[dict]:
    return [{"id": o.id, "full_name": o.full_name, "category": o.category, "label": o.display_name} for o in options]


def _snapshot(view: CalendarViewUseCase, result: EditResult | None = None) -> SessionResponseSchema:
    in_list = view.state.mode == Mode.list
    return SessionResponseSchema(
        state=jsonable_encoder(view.state),
        staff_options=_staff(view.staff_options),
        edit_staff_options=_staff(view.edit_staff_options),
        calendar_view=None if in_list else jsonable_encoder(view.calendar_view_model()),
        list_view=jsonable_encoder(view.list_view_model()) if in_list else None,
        result=EditResultSchema(ok=result.ok, message=result.message) if result else None,
    )


@router.get("", response_model=SessionResponseSchema)
async def session(view: CalendarViewUseCase = Depends(_started_view)):
    return _snapshot(view)


@router.post("/refresh", response_model=SessionResponseSchema)
async def refresh(view: CalendarViewUseCase = Depends(_started_view)):
    await view.refresh()
    return _snapshot(view)


@router.post("/mode", response_model=SessionResponseSchema)
async def switch_mode(req: ModeRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.switch_mode(req.mode)
    return _snapshot(view)


@router.post("/view", response_model=SessionResponseSchema)
async def switch_view(req: ViewRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.switch_view(req.view)
    return _snapshot(view)


@router.post("/category", response_model=SessionResponseSchema)
async def change_category(req: CategoryRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.change_category(req.category)
    return _snapshot(view)


@router.post("/staff", response_model=SessionResponseSchema)
async def change_staff(req: StaffRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.change_staff(req.staff_id)
    return _snapshot(view)


@router.post("/navigate", response_model=SessionResponseSchema)
async def navigate(req: NavigateRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.navigate(req.direction)
    return _snapshot(view)


@router.post("/today", response_model=SessionResponseSchema)
async def go_today(view: CalendarViewUseCase = Depends(_started_view)):
    await view.go_today()
    return _snapshot(view)


@router.post("/date", response_model=SessionResponseSchema)
async def pick_date(req: DateRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.pick_date(req.day)
    return _snapshot(view)


@router.post("/list-range", response_model=SessionResponseSchema)
async def set_list_range(req: ListRangeRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    await view.set_list_range(req.start, req.end)
    return _snapshot(view)


@router.post("/select-day", response_model=SessionResponseSchema)
async def select_day(req: SelectDayRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    view.select_day(req.day_key)
    return _snapshot(view)


@router.post("/select-appointment", response_model=SessionResponseSchema)
async def select_appointment(req: AppointmentRefSchema, view: CalendarViewUseCase = Depends(_started_view)):
    if not view.select_appointment(req.appointment_id):
        raise HTTPException(status_code=404, detail="Appointment is not visible")
    return _snapshot(view)


@router.post("/edit", response_model=SessionResponseSchema)
async def toggle_edit(req: AppointmentRefSchema, view: CalendarViewUseCase = Depends(_started_view)):
    if not await view.toggle_edit(req.appointment_id):
        raise HTTPException(status_code=404, detail="Appointment is not visible")
    return _snapshot(view)


@router.post("/edit/submit", response_model=SessionResponseSchema)
async def submit_edit(req: EditSubmitSchema, view: CalendarViewUseCase = Depends(_started_view)):
    if not view.state.editing_appointment_id:
        raise HTTPException(status_code=409, detail="No appointment is being edited")
    result = await view.submit_edit(EditForm(**req.model_dump()))
    return _snapshot(view, result)


@router.post("/cancel", response_model=SessionResponseSchema)
async def cancel_appointment(req: CancelRequestSchema, view: CalendarViewUseCase = Depends(_started_view)):
    result = await view.cancel_appointment(req.appointment_id, req.reason)
    return _snapshot(view, result)
