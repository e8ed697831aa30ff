from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.staff_option import StaffOption


@dataclass(frozen=True)
class AppointmentUpdate:
    staff_id: str | None
    starts_at: datetime
    ends_at: datetime
    customer_full_name: str
    customer_phone: str
    customer_email: str | None = None
    notes: str | None = None


class AdminApiPort(ABC):
    @abstractmethod
    async def fetch_appointments(
        self,
        start: datetime,
        end: datetime,
        *,
        category: str | None = None,
        staff_id: str | None = None,
        include_past: bool = False,
    ) -> list[Appointment]:
        """Appointments starting in [start, end). Raises NetworkFailure."""
        raise NotImplementedError

    @abstractmethod
    async def fetch_staff(self, category: str) -> list[StaffOption]:
        """Staff members serving a category ("men" or "women")."""
        raise NotImplementedError

    @abstractmethod
    async def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> None:
        """Update an appointment. Raises ConflictError on booking collisions."""
        raise NotImplementedError

    @abstractmethod
    async def cancel_appointment(self, appointment_id: str, reason: str | None = None) -> None:
        """Cancel an appointment. Raises AdminApiError when rejected."""
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release transport resources. Adapters without any keep this no-op."""
        return None
