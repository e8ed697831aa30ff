from __future__ import annotations

import logging
from dataclasses import dataclass

from salon_calendar.application.exceptions import (
    ConflictError,
    NetworkFailure,
    ValidationFailure,
)
from salon_calendar.application.ports.admin_api import AdminApiPort, AppointmentUpdate
from salon_calendar.application.utils.local_calendar import LocalCalendar

INVALID_TIME_RANGE_MESSAGE = "Saat aralığı geçersiz."
SAVED_MESSAGE = "Kaydedildi."
SAVE_FAILED_MESSAGE = "Kaydetme hatası."
CANCEL_FAILED_MESSAGE = "İptal hatası"


@dataclass(frozen=True)
class EditForm:
    start_time: str  # "HH:MM" local
    end_time: str
    customer_full_name: str
    customer_phone: str
    staff_id: str | None = None
    customer_email: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class EditResult:
    ok: bool
    message: str | None = None


class AppointmentEditUseCase:
    def __init__(self, api: AdminApiPort, calendar: LocalCalendar) -> None:
        self._api = api
        self._calendar = calendar
        self._logger = logging.getLogger(__name__)

    def build_update(self, day_key: str | None, form: EditForm) -> AppointmentUpdate:
        """Turn the edit form into an update; raises ValidationFailure before any call is made."""
        starts = self._calendar.time_on_day(day_key, form.start_time) if day_key else None
        ends = self._calendar.time_on_day(day_key, form.end_time) if day_key else None
        if not starts or not ends or ends <= starts:
            raise ValidationFailure(INVALID_TIME_RANGE_MESSAGE)

        return AppointmentUpdate(
            staff_id=(form.staff_id or "").strip() or None,
            starts_at=starts,
            ends_at=ends,
            customer_full_name=(form.customer_full_name or "").strip(),
            customer_phone=(form.customer_phone or "").strip(),
            customer_email=(form.customer_email or "").strip() or None,
            notes=(form.notes or "").strip() or None,
        )

    async def submit_update(self, appointment_id: str, day_key: str | None, form: EditForm) -> EditResult:
        try:
            update = self.build_update(day_key, form)
        except ValidationFailure as e:
            return EditResult(ok=False, message=str(e))

        try:
            await self._api.update_appointment(appointment_id, update)
        except ConflictError as e:
            self._logger.info("Appointment update conflict", extra={"appointment_id": appointment_id, "reason": str(e)})
            return EditResult(ok=False, message=str(e))
        except NetworkFailure as e:
            self._logger.error("Appointment update failed", extra={"appointment_id": appointment_id, "error": str(e)})
            return EditResult(ok=False, message=str(e) or SAVE_FAILED_MESSAGE)

        self._logger.info("Appointment updated", extra={"appointment_id": appointment_id})
        return EditResult(ok=True, message=SAVED_MESSAGE)

    async def cancel(self, appointment_id: str, reason: str | None = None) -> EditResult:
        reason = (reason or "").strip() or None
        try:
            await self._api.cancel_appointment(appointment_id, reason)
        except NetworkFailure as e:
            self._logger.error("Appointment cancel failed", extra={"appointment_id": appointment_id, "error": str(e)})
            return EditResult(ok=False, message=str(e) or CANCEL_FAILED_MESSAGE)

        self._logger.info("Appointment cancelled", extra={"appointment_id": appointment_id})
        return EditResult(ok=True)
