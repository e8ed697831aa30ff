from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class PushEventKind(str, Enum):
    new_appointment = "newAppointment"
    update_appointment = "updateAppointment"


@dataclass(frozen=True)
class AppointmentSummary:
    customer_name: str
    time: str | None = None


@dataclass(frozen=True)
class PushEvent:
    kind: PushEventKind
    summary: AppointmentSummary | None = None
