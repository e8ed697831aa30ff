from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ValidationError

from salon_calendar.domain.entities.push_event import (
    AppointmentSummary,
    PushEvent,
    PushEventKind,
)


class NewAppointmentPayloadDTO(BaseModel):
    customerName: str | None = None
    time: str | None = None


class PushEnvelopeDTO(BaseModel):
    """Webhook body. Payload shape is only known for newAppointment, so it is kept raw."""

    event: str
    payload: Any = None


def parse_push_event(kind: PushEventKind | str, payload: Any) -> PushEvent:
    """
    Build a PushEvent from a raw channel payload.

    Only newAppointment carries a summary contract; anything unusable there
    yields an event without a summary rather than an error.
    """
    kind = PushEventKind(kind)
    if kind != PushEventKind.new_appointment or not isinstance(payload, dict):
        return PushEvent(kind=kind)

    try:
        data = NewAppointmentPayloadDTO.model_validate(payload)
    except ValidationError:
        return PushEvent(kind=kind)

    name = str(data.customerName or "").strip() or "-"
    time = str(data.time or "").strip() or None
    return PushEvent(kind=kind, summary=AppointmentSummary(customer_name=name, time=time))
