from __future__ import annotations

import logging

from salon_calendar.application.ports.push_channel import PushChannelPort


class MockPushChannel(PushChannelPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.rooms: list[str] = []

    async def subscribe(self, room: str) -> None:
        self.rooms.append(room)
        self._logger.info("Mock push subscription", extra={"reason": room})
