from __future__ import annotations

from dataclasses import dataclass

from salon_calendar.domain.entities.appointment import Appointment


@dataclass(frozen=True)
class DisplayWindow:
    start_hour: int = 8
    end_hour: int = 20

    @property
    def total_minutes(self) -> int:
        return (self.end_hour - self.start_hour) * 60


@dataclass(frozen=True)
class LayoutEvent:
    appointment: Appointment
    start_minute: int  # offset from window start, clamped to [0, total_minutes]
    end_minute: int
    lane: int
    lane_count: int

    def width_fraction(self, gap: float = 0.0, row_width: float = 1.0) -> float:
        """Width of the event box: (row - (lanes - 1) * gap) / lanes."""
        lanes = max(1, self.lane_count)
        return (row_width - (lanes - 1) * gap) / lanes

    def left_offset(self, gap: float = 0.0, row_width: float = 1.0) -> float:
        """Left edge of the event box: lane * (width + gap)."""
        lanes = max(1, self.lane_count)
        lane = max(0, min(self.lane, lanes - 1))
        return lane * (self.width_fraction(gap, row_width) + gap)

    def overlaps(self, other: "LayoutEvent") -> bool:
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute
