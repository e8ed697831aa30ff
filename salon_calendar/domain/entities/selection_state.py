from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from salon_calendar.domain.entities.calendar_range import CalendarView


class Mode(str, Enum):
    list = "list"
    calendar = "calendar"


class CategoryFilter(str, Enum):
    all = "all"
    men = "men"
    women = "women"


@dataclass(frozen=True)
class SelectionState:
    focus_date: date
    mode: Mode = Mode.list
    view: CalendarView = CalendarView.month
    selected_day_key: str | None = None  # YYYY-MM-DD in the business zone
    selected_appointment_id: str | None = None
    editing_appointment_id: str | None = None
    category: CategoryFilter = CategoryFilter.all
    staff_id: str | None = None  # None means all staff
    # List mode works on an inclusive date range picked by the user
    list_start: date | None = None
    list_end: date | None = None

    @property
    def category_param(self) -> str | None:
        """Category as sent to the admin API, None when not filtering."""
        if self.category == CategoryFilter.all:
            return None
        return self.category.value
