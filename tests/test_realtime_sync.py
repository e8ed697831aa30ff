"""
Tests for push-driven refreshes and toasts.
"""

from __future__ import annotations

import asyncio
from datetime import date

from salon_calendar.application.exceptions import NetworkFailure
from salon_calendar.application.ports.push_channel import PushChannelPort
from salon_calendar.application.use_cases.calendar_view import CalendarViewUseCase
from salon_calendar.application.use_cases.edit_appointment import AppointmentEditUseCase
from salon_calendar.application.use_cases.realtime_sync import RealtimeSyncBridge, format_new_appointment_toast
from salon_calendar.application.use_cases.staff_options import StaffOptionsUseCase
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.domain.entities.appointment import Appointment, Category
from salon_calendar.domain.entities.push_event import AppointmentSummary, PushEvent, PushEventKind
from salon_calendar.infrastructure.admin_api.mock_admin_api import MockAdminApi
from salon_calendar.infrastructure.notifications.log_notifier import LogNotifier
from salon_calendar.infrastructure.realtime.mock_push_channel import MockPushChannel


CAL = LocalCalendar()


class BrokenChannel(PushChannelPort):
    async def subscribe(self, room: str) -> None:
        raise NetworkFailure("unreachable")


class FlakyChannel(PushChannelPort):
    """Fails the first `failures` subscribe calls, then records rooms."""

    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.attempts = 0
        self.rooms: list[str] = []

    async def subscribe(self, room: str) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise NetworkFailure("unreachable")
        self.rooms.append(room)


def _appt(appointment_id: str, day: str) -> Appointment:
    return Appointment(
        id=appointment_id,
        category=Category.women,
        starts_at=CAL.time_on_day(day, "14:00"),
        ends_at=CAL.time_on_day(day, "15:00"),
        customer_full_name="Elif",
    )


def _bridge(api: MockAdminApi, channel: PushChannelPort | None = None):
    view = CalendarViewUseCase(
        api=api,
        calendar=CAL,
        staff_options=StaffOptionsUseCase(api),
        edit=AppointmentEditUseCase(api, CAL),
        today=date(2024, 3, 1),
    )
    notifier = LogNotifier()
    bridge = RealtimeSyncBridge(view=view, notifier=notifier, channel=channel or MockPushChannel())
    return view, notifier, bridge


def test_connect_and_reconnect_subscribe_to_room():
    """Every (re)connection re-joins the admin room."""
    channel = MockPushChannel()
    _, _, bridge = _bridge(MockAdminApi(), channel)

    async def scenario():
        await bridge.on_connect()
        await bridge.on_reconnect()

    asyncio.run(scenario())
    assert channel.rooms == ["adminRoom", "adminRoom"]


def test_subscription_failure_is_not_fatal():
    """A failing subscribe is logged and reported, not raised."""
    _, _, bridge = _bridge(MockAdminApi(), BrokenChannel())
    assert asyncio.run(bridge.on_connect()) is False


def test_subscription_is_retried_until_it_succeeds():
    """Failed subscribes are retried; the first success after a failure is a reconnect that refreshes."""
    api = MockAdminApi()
    channel = FlakyChannel(failures=2)
    view, _, bridge = _bridge(api, channel)

    async def scenario():
        await view.start()
        before = len(api.calls)
        await bridge.maintain_subscription(retry_seconds=0, renew_seconds=0, rounds=3)
        return len(api.calls) - before

    refetches = asyncio.run(scenario())
    assert channel.attempts == 3
    assert channel.rooms == ["adminRoom"]
    assert refetches == 1


def test_live_subscription_is_renewed_without_refetching():
    """Renewing a healthy subscription re-joins the room but does not refetch."""
    api = MockAdminApi()
    channel = MockPushChannel()
    view, _, bridge = _bridge(api, channel)

    async def scenario():
        await view.start()
        before = len(api.calls)
        await bridge.maintain_subscription(retry_seconds=0, renew_seconds=0, rounds=3)
        return len(api.calls) - before

    assert asyncio.run(scenario()) == 0
    assert channel.rooms == ["adminRoom"] * 3


def test_reconnect_before_start_does_not_fetch():
    """A reconnect while the view has not started only re-joins the room."""
    api = MockAdminApi()
    _, _, bridge = _bridge(api)
    assert asyncio.run(bridge.on_reconnect()) is True
    assert api.calls == []


def test_new_appointment_toasts_and_refreshes():
    """A newAppointment push shows a toast and refetches the active list."""
    api = MockAdminApi()
    view, notifier, bridge = _bridge(api)

    async def scenario():
        await view.start()
        assert view.list_appointments == []
        api.add(_appt("n1", "2024-03-02"))
        return await bridge.handle_raw("newAppointment", {"customerName": "Elif", "time": "14:00"})

    assert asyncio.run(scenario()) is True
    assert list(notifier.sent) == ["Yeni Randevu: Elif - 14:00"]
    assert [a.id for a in view.list_appointments] == ["n1"]


def test_update_and_malformed_pushes_refresh_without_toast():
    """updateAppointment and unusable payloads refresh silently."""
    api = MockAdminApi()
    view, notifier, bridge = _bridge(api)

    async def scenario():
        await view.switch_mode("calendar")
        before = len(api.calls)
        await bridge.handle_raw("updateAppointment", {"id": 5})
        await bridge.handle_raw("newAppointment", "garbage")
        return len(api.calls) - before

    fetches = asyncio.run(scenario())
    assert fetches == 2
    assert list(notifier.sent) == []


def test_unknown_event_is_ignored():
    """Unknown channel events neither toast nor refetch."""
    api = MockAdminApi()
    _, notifier, bridge = _bridge(api)
    assert asyncio.run(bridge.handle_raw("somethingElse", {})) is False
    assert api.calls == []
    assert list(notifier.sent) == []


def test_toast_text():
    """Time is appended only when present."""
    with_time = PushEvent(PushEventKind.new_appointment, AppointmentSummary("Elif", "14:00"))
    without_time = PushEvent(PushEventKind.new_appointment, AppointmentSummary("Elif"))
    assert format_new_appointment_toast(with_time) == "Yeni Randevu: Elif - 14:00"
    assert format_new_appointment_toast(without_time) == "Yeni Randevu: Elif"
    assert format_new_appointment_toast(PushEvent(PushEventKind.update_appointment)) is None


def test_notifier_keeps_only_recent_toasts():
    """Toast history is capped; the oldest toasts drop off first."""
    notifier = LogNotifier(history=3)
    for n in range(5):
        notifier.notify(f"Yeni Randevu: {n}")
    assert list(notifier.sent) == ["Yeni Randevu: 2", "Yeni Randevu: 3", "Yeni Randevu: 4"]
