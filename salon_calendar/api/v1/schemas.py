from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

from salon_calendar.application.dto.admin_api_payloads import AppointmentDTO
from salon_calendar.domain.entities.calendar_range import CalendarView
from salon_calendar.domain.entities.selection_state import CategoryFilter, Mode


class RangeResponseSchema(BaseModel):
    view: CalendarView
    focus: date
    start: datetime
    end: datetime
    label: str
    days: int
    day_keys: list[str] = Field(default_factory=list)


class WindowSchema(BaseModel):
    start_hour: int = Field(8, ge=0, le=23)
    end_hour: int = Field(20, ge=1, le=24)

    @model_validator(mode="after")
    def _check_order(self) -> "WindowSchema":
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be after start_hour")
        return self


class LayoutRequestSchema(BaseModel):
    appointments: list[AppointmentDTO] = Field(default_factory=list)
    window: WindowSchema | None = None
    gap_px: float = Field(6, ge=0)
    row_width_px: float = Field(600, gt=0)


class LayoutEventSchema(BaseModel):
    id: str
    day_key: str
    start_minute: int
    end_minute: int
    lane: int
    lane_count: int
    left_px: float
    width_px: float


class LayoutResponseSchema(BaseModel):
    events: list[LayoutEventSchema]


# Admin session: one server-side SelectionState driven by these requests


class ModeRequestSchema(BaseModel):
    mode: Mode


class ViewRequestSchema(BaseModel):
    view: CalendarView


class CategoryRequestSchema(BaseModel):
    category: CategoryFilter


class StaffRequestSchema(BaseModel):
    staff_id: str | None = None


class NavigateRequestSchema(BaseModel):
    direction: Literal[-1, 1]


class DateRequestSchema(BaseModel):
    day: date


class ListRangeRequestSchema(BaseModel):
    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self) -> "ListRangeRequestSchema":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self


class SelectDayRequestSchema(BaseModel):
    day_key: str = Field(..., pattern=r"^\d{4}-\d{2}-\d{2}$")


class AppointmentRefSchema(BaseModel):
    appointment_id: str = Field(..., min_length=1)


class EditSubmitSchema(BaseModel):
    start_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}$")
    end_time: str = Field(..., pattern=r"^\d{1,2}:\d{2}$")
    customer_full_name: str = ""
    customer_phone: str = ""
    staff_id: str | None = None
    customer_email: str | None = None
    notes: str | None = None


class CancelRequestSchema(BaseModel):
    appointment_id: str = Field(..., min_length=1)
    reason: str | None = None


class EditResultSchema(BaseModel):
    ok: bool
    message: str | None = None


class SessionResponseSchema(BaseModel):
    state: dict[str, Any]
    staff_options: list[dict[str, Any]] = Field(default_factory=list)
    edit_staff_options: list[dict[str, Any]] = Field(default_factory=list)
    calendar_view: dict[str, Any] | None = None
    list_view: dict[str, Any] | None = None
    result: EditResultSchema | None = None
