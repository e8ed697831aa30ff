from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from salon_calendar.application.dto.admin_api_payloads import (
    AppointmentUpdateDTO,
    parse_appointments,
    parse_staff,
)
from salon_calendar.application.exceptions import AdminApiError, ConflictError, NetworkFailure
from salon_calendar.application.ports.admin_api import AdminApiPort, AppointmentUpdate
from salon_calendar.application.utils.local_calendar import as_utc
from salon_calendar.core.config import settings
from salon_calendar.domain.entities.appointment import Appointment
from salon_calendar.domain.entities.staff_option import StaffOption


class AdminApiClient(AdminApiPort):
    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = (base_url or settings.ADMIN_API_BASE_URL or "").rstrip("/")
        self._token = token if token is not None else settings.ADMIN_API_TOKEN
        self._client = client or httpx.AsyncClient(timeout=timeout or settings.HTTP_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

        if not self._base_url:
            raise ValueError("ADMIN_API_BASE_URL is required for the admin API client")

    async def fetch_appointments(
        self,
        start: datetime,
        end: datetime,
        *,
        category: str | None = None,
        staff_id: str | None = None,
        include_past: bool = False,
    ) -> list[Appointment]:
        params: dict[str, str] = {"start": _iso(start), "end": _iso(end)}
        if category:
            params["category"] = str(category)
        if staff_id:
            params["staffId"] = str(staff_id)
        if include_past:
            params["includePast"] = "1"

        data = await self._request("GET", "/appointments", params=params)
        return parse_appointments(data)

    async def fetch_staff(self, category: str) -> list[StaffOption]:
        data = await self._request("GET", "/staff", params={"category": category})
        return parse_staff(data)

    async def update_appointment(self, appointment_id: str, update: AppointmentUpdate) -> None:
        body = AppointmentUpdateDTO(
            staffId=update.staff_id,
            startsAt=_iso(update.starts_at),
            endsAt=_iso(update.ends_at),
            customerFullName=update.customer_full_name,
            customerPhone=update.customer_phone,
            customerEmail=update.customer_email,
            notes=update.notes,
        )
        await self._request("PUT", f"/appointments/{appointment_id}", json=body.model_dump())
        self._logger.info("Appointment update sent", extra={"appointment_id": appointment_id})

    async def cancel_appointment(self, appointment_id: str, reason: str | None = None) -> None:
        await self._request("DELETE", f"/appointments/{appointment_id}", json={"reason": reason or None})
        self._logger.info("Appointment cancel sent", extra={"appointment_id": appointment_id})

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self._base_url}{path}"
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            self._logger.error("Admin API unreachable", extra={"error": str(e), "reason": f"{method} {path}"})
            raise NetworkFailure(str(e) or "Network error") from e

        if response.status_code >= 400:
            message = _error_message(response)
            self._logger.error(
                "Admin API request failed",
                extra={"error": message, "reason": f"{method} {path} -> {response.status_code}"},
            )
            if response.status_code == 409:
                raise ConflictError(message)
            if method == "GET":
                raise NetworkFailure(message, status_code=response.status_code)
            raise AdminApiError(message, status_code=response.status_code)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            self._logger.warning("Admin API returned non-JSON body", extra={"reason": f"{method} {path}"})
            return None


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return f"HTTP {response.status_code}"


def _iso(value: datetime) -> str:
    return as_utc(value).isoformat().replace("+00:00", "Z")
