from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Category(str, Enum):
    men = "men"
    women = "women"


class AppointmentStatus(str, Enum):
    booked = "booked"
    completed = "completed"
    cancelled = "cancelled"
    no_show = "no_show"


@dataclass(frozen=True)
class ServiceItem:
    name: str


@dataclass(frozen=True)
class Appointment:
    id: str
    category: Category
    starts_at: datetime  # aware, UTC
    ends_at: datetime  # aware, UTC; ends_at > starts_at is enforced upstream
    status: AppointmentStatus = AppointmentStatus.booked
    staff_id: str | None = None
    staff_full_name: str | None = None
    customer_full_name: str | None = None
    customer_phone: str | None = None
    customer_email: str | None = None
    notes: str | None = None
    services: tuple[ServiceItem, ...] = ()

    @property
    def is_booked(self) -> bool:
        return self.status == AppointmentStatus.booked

    @property
    def service_names(self) -> str:
        return ", ".join(s.name for s in self.services if s.name)
