from __future__ import annotations

import asyncio
import logging

from salon_calendar.application.ports.admin_api import AdminApiPort
from salon_calendar.domain.entities.staff_option import StaffOption

STAFF_CATEGORIES = ("men", "women")


class StaffOptionsUseCase:
    """Staff lookups cached per category for the lifetime of the admin session."""

    def __init__(self, api: AdminApiPort) -> None:
        self._api = api
        self._cache: dict[str, list[StaffOption]] = {}
        self._logger = logging.getLogger(__name__)

    async def fetch(self, category: str | None) -> list[StaffOption]:
        if category not in STAFF_CATEGORIES:
            return []
        cached = self._cache.get(category)
        if cached is not None:
            return cached
        staff = await self._api.fetch_staff(category)
        self._cache[category] = list(staff)
        return self._cache[category]

    async def options_for_scope(self, scope: str | None) -> list[StaffOption]:
        """
        Options for the staff filter.

        A "men"/"women" scope returns that category; anything else merges both
        categories, keeping the first occurrence of each id.
        """
        if scope in STAFF_CATEGORIES:
            return await self.fetch(scope)
        men, women = await asyncio.gather(self.fetch("men"), self.fetch("women"))
        return unique_by_id([*men, *women])


def unique_by_id(items: list[StaffOption]) -> list[StaffOption]:
    seen: dict[str, StaffOption] = {}
    for item in items:
        key = str(item.id or "").strip()
        if key and key not in seen:
            seen[key] = item
    return list(seen.values())
