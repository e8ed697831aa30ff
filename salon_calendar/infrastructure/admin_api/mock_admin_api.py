from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from salon_calendar.application.exceptions import AdminApiError, ConflictError
from salon_calendar.application.ports.admin_api import AdminApiPort, AppointmentUpdate
from salon_calendar.domain.entities.appointment import Appointment, AppointmentStatus
from salon_calendar.domain.entities.staff_option import StaffOption

CONFLICT_MESSAGE = "Bu saat aralığında seçili personelde çakışma var."
NOT_ACTIVE_MESSAGE = "Bu randevu artık aktif değil."
NOT_FOUND_MESSAGE = "Randevu bulunamadı."


class MockAdminApi(AdminApiPort):
    """In-memory admin API used in dev/local and in tests."""

    def __init__(
        self,
        appointments: list[Appointment] | None = None,
        staff: list[StaffOption] | None = None,
    ) -> None:
        self._appointments: dict[str, Appointment] = {a.id: a for a in appointments or []}
        self._staff: list[StaffOption] = list(staff or [])
        self._logger = logging.getLogger(__name__)
        self.calls: list[tuple[str, dict]] = []

    def add(self, appointment: Appointment) -> None:
        self._appointments[appointment.id] = appointment

    def get(self, appointment_id: str) -> Appointment | None:
        return self._appointments.get(appointment_id)

    async def fetch_appointments(
        self,
        start: datetime,
        end: datetime,
        *,
        category: str | None = None,
        staff_id: str | None = None,
        include_past: bool = False,
    ) -> list[Appointment]:
        self.calls.append(
            (
                "fetch_appointments",
                {"start": start, "end": end, "category": category, "staff_id": staff_id, "include_past": include_past},
            )
        )
        out = [a for a in self._appointments.values() if start <= a.starts_at < end]
        if category:
            out = [a for a in out if a.category.value == category]
        if staff_id:
            out = [a for a in out if a.staff_id == staff_id]
        if not include_past:
            out = [a for a in out if a.status == AppointmentStatus.booked]
        return sorted(out, key=lambda a: a.starts_at)

    async def fetch_staff(self, category: str) -> list[StaffOption]:
        self.calls.append(("fetch_staff", {"category": category}))
        return [s for s in self._staff if s.category in (category, "both")]

    async def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> None:
        self.calls.append(("update_appointment", {"id": appointment_id}))
        before = self._require_booked(appointment_id)

        if update.staff_id:
            for other in self._appointments.values():
                if other.id == appointment_id or other.staff_id != update.staff_id or not other.is_booked:
                    continue
                if other.starts_at < update.ends_at and update.starts_at < other.ends_at:
                    raise ConflictError(CONFLICT_MESSAGE)

        self._appointments[appointment_id] = replace(
            before,
            staff_id=update.staff_id,
            starts_at=update.starts_at,
            ends_at=update.ends_at,
            customer_full_name=update.customer_full_name,
            customer_phone=update.customer_phone,
            customer_email=update.customer_email,
            notes=update.notes,
        )
        self._logger.info("Mock appointment updated", extra={"appointment_id": appointment_id})

    async def cancel_appointment(self, appointment_id: str, reason: str | None = None) -> None:
        self.calls.append(("cancel_appointment", {"id": appointment_id, "reason": reason}))
        before = self._require_booked(appointment_id)
        self._appointments[appointment_id] = replace(before, status=AppointmentStatus.cancelled)
        self._logger.info("Mock appointment cancelled", extra={"appointment_id": appointment_id})

    def _require_booked(self, appointment_id: str) -> Appointment:
        appointment = self._appointments.get(appointment_id)
        if appointment is None:
            raise AdminApiError(NOT_FOUND_MESSAGE, status_code=404)
        if not appointment.is_booked:
            raise ConflictError(NOT_ACTIVE_MESSAGE)
        return appointment
