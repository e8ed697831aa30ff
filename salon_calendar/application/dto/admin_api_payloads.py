from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from salon_calendar.application.utils.local_calendar import as_utc
from salon_calendar.domain.entities.appointment import (
    Appointment,
    AppointmentStatus,
    Category,
    ServiceItem,
)
from salon_calendar.domain.entities.staff_option import StaffOption

logger = logging.getLogger(__name__)


class ServiceItemDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str | None = None


class AppointmentDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    category: Category
    starts_at: datetime
    ends_at: datetime
    status: AppointmentStatus = AppointmentStatus.booked
    staff_id: str | None = None
    staff_full_name: str | None = None
    customer_full_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    notes: str | None = None
    services: list[ServiceItemDTO | None] = Field(default_factory=list)

    @field_validator("id", "staff_id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("services", mode="before")
    @classmethod
    def _services_list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    def to_entity(self) -> Appointment:
        return Appointment(
            id=self.id,
            category=self.category,
            starts_at=as_utc(self.starts_at),
            ends_at=as_utc(self.ends_at),
            status=self.status,
            staff_id=self.staff_id or None,
            staff_full_name=self.staff_full_name or None,
            customer_full_name=self.customer_full_name,
            customer_phone=self.customer_phone,
            customer_email=self.customer_email,
            notes=self.notes,
            services=tuple(ServiceItem(name=s.name) for s in self.services if s and s.name),
        )


class StaffOptionDTO(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    full_name: str = ""
    category: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        return value if isinstance(value, str) else str(value)

    @field_validator("full_name", "category", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_entity(self) -> StaffOption:
        return StaffOption(id=self.id.strip(), full_name=self.full_name, category=self.category)


class AppointmentUpdateDTO(BaseModel):
    """Body of PUT /appointments/{id}."""

    staffId: str | None = None
    startsAt: str
    endsAt: str
    customerFullName: str
    customerPhone: str
    customerEmail: str | None = None
    notes: str | None = None


def parse_appointments(data: Any) -> list[Appointment]:
    """Normalize an appointments response; non-list payloads and bad items are dropped."""
    items = data.get("appointments") if isinstance(data, dict) else data
    if not isinstance(items, list):
        logger.warning("Malformed appointments response, treating as empty", extra={"reason": type(items).__name__})
        return []
    out: list[Appointment] = []
    for raw in items:
        try:
            out.append(AppointmentDTO.model_validate(raw).to_entity())
        except ValidationError as e:
            logger.warning("Dropping malformed appointment", extra={"error": str(e)})
    return out


def parse_staff(data: Any) -> list[StaffOption]:
    items = data.get("staff") if isinstance(data, dict) else data
    if not isinstance(items, list):
        logger.warning("Malformed staff response, treating as empty", extra={"reason": type(items).__name__})
        return []
    out: list[StaffOption] = []
    for raw in items:
        try:
            option = StaffOptionDTO.model_validate(raw).to_entity()
        except ValidationError as e:
            logger.warning("Dropping malformed staff option", extra={"error": str(e)})
            continue
        if option.id:
            out.append(option)
    return out
