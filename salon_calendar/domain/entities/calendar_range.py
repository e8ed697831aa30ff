from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CalendarView(str, Enum):
    month = "month"
    week = "week"
    day = "day"


@dataclass(frozen=True)
class CalendarRange:
    start: datetime
    end: datetime  # exclusive
    label: str

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end

    @property
    def days(self) -> int:
        # Local days are 24h long in the business zone; rounding covers DST zones.
        return round((self.end - self.start).total_seconds() / 86400)
