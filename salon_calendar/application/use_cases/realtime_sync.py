from __future__ import annotations

import asyncio
import logging
from typing import Any

from salon_calendar.application.dto.push_event import parse_push_event
from salon_calendar.application.exceptions import NetworkFailure
from salon_calendar.application.ports.notifier import NotifierPort
from salon_calendar.application.ports.push_channel import PushChannelPort
from salon_calendar.application.use_cases.calendar_view import CalendarViewUseCase
from salon_calendar.domain.entities.push_event import PushEvent, PushEventKind


def format_new_appointment_toast(event: PushEvent) -> str | None:
    if event.kind != PushEventKind.new_appointment or event.summary is None:
        return None
    time = f" - {event.summary.time}" if event.summary.time else ""
    return f"Yeni Randevu: {event.summary.customer_name}{time}"


class RealtimeSyncBridge:
    """
    Reconciles the active view with push notifications.

    Push events never change the selection directly: they only surface a
    toast and re-run fetch -> layout for whichever mode is active.
    """

    def __init__(
        self,
        view: CalendarViewUseCase,
        notifier: NotifierPort,
        channel: PushChannelPort,
        room: str = "adminRoom",
    ) -> None:
        self._view = view
        self._notifier = notifier
        self._channel = channel
        self._room = room
        self._logger = logging.getLogger(__name__)

    async def on_connect(self) -> bool:
        return await self._subscribe()

    async def on_reconnect(self) -> bool:
        """Re-join the room and catch up on anything pushed while the subscription was down."""
        ok = await self._subscribe()
        if ok and self._view.started:
            await self._view.refresh()
        return ok

    async def maintain_subscription(
        self,
        retry_seconds: float = 5.0,
        renew_seconds: float = 300.0,
        rounds: int | None = None,
    ) -> None:
        """
        Keep the room subscription alive for the lifetime of the service.

        A failed attempt is retried after retry_seconds and the next success
        counts as a reconnect. A live subscription is renewed every
        renew_seconds. rounds bounds the loop (None runs until cancelled).
        """
        connected = False
        attempt = 0
        while rounds is None or attempt < rounds:
            attempt += 1
            if connected:
                ok = await self._subscribe()
            elif attempt == 1:
                ok = await self.on_connect()
            else:
                ok = await self.on_reconnect()
            connected = ok
            await asyncio.sleep(renew_seconds if ok else retry_seconds)

    async def handle_raw(self, event_name: str, payload: Any = None) -> bool:
        """Entry point for raw channel messages; unknown event names are ignored."""
        try:
            kind = PushEventKind(event_name)
        except ValueError:
            self._logger.debug("Ignoring unknown push event", extra={"event": event_name})
            return False
        await self.handle(parse_push_event(kind, payload))
        return True

    async def handle(self, event: PushEvent) -> bool:
        toast = format_new_appointment_toast(event)
        if toast:
            self._notifier.notify(toast)

        self._logger.info("Push event received, refreshing", extra={"event": event.kind.value})
        return await self._view.refresh()

    async def _subscribe(self) -> bool:
        try:
            await self._channel.subscribe(self._room)
        except NetworkFailure as e:
            self._logger.warning("Push subscription failed", extra={"reason": self._room, "error": str(e)})
            return False
        return True
