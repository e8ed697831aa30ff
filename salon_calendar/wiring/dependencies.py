from functools import lru_cache
import logging

from salon_calendar.core.config import settings
from salon_calendar.application.ports.admin_api import AdminApiPort
from salon_calendar.application.ports.notifier import NotifierPort
from salon_calendar.application.ports.push_channel import PushChannelPort
from salon_calendar.application.use_cases.calendar_view import CalendarViewUseCase
from salon_calendar.application.use_cases.edit_appointment import AppointmentEditUseCase
from salon_calendar.application.use_cases.realtime_sync import RealtimeSyncBridge
from salon_calendar.application.use_cases.staff_options import StaffOptionsUseCase
from salon_calendar.application.utils.local_calendar import LocalCalendar
from salon_calendar.domain.entities.layout_event import DisplayWindow
from salon_calendar.infrastructure.admin_api.admin_api_client import AdminApiClient
from salon_calendar.infrastructure.admin_api.mock_admin_api import MockAdminApi
from salon_calendar.infrastructure.notifications.log_notifier import LogNotifier
from salon_calendar.infrastructure.realtime.mock_push_channel import MockPushChannel
from salon_calendar.infrastructure.realtime.push_subscription_client import PushSubscriptionClient


def _use_mocks() -> bool:
    return not settings.ADMIN_API_BASE_URL or settings.ENV.lower() in {"dev", "local"}


@lru_cache
def get_calendar() -> LocalCalendar:
    return LocalCalendar(settings.BUSINESS_TIMEZONE)


def get_display_window() -> DisplayWindow:
    return DisplayWindow(start_hour=settings.DAY_START_HOUR, end_hour=settings.DAY_END_HOUR)


@lru_cache
def get_admin_api() -> AdminApiPort:
    logger = logging.getLogger(__name__)
    logger.info("ENV=%s", settings.ENV)
    if _use_mocks():
        logger.info("Using MockAdminApi (base URL missing or ENV=dev/local)")
        return MockAdminApi()
    logger.info("Using real AdminApiClient")
    return AdminApiClient()


@lru_cache
def get_staff_options() -> StaffOptionsUseCase:
    return StaffOptionsUseCase(api=get_admin_api())


def get_edit_use_case() -> AppointmentEditUseCase:
    return AppointmentEditUseCase(api=get_admin_api(), calendar=get_calendar())


@lru_cache
def get_calendar_view() -> CalendarViewUseCase:
    return CalendarViewUseCase(
        api=get_admin_api(),
        calendar=get_calendar(),
        staff_options=get_staff_options(),
        edit=get_edit_use_case(),
        window=get_display_window(),
        lane_gap_px=settings.LANE_GAP_PX,
        month_max_chips=settings.MONTH_CELL_MAX_CHIPS,
    )


@lru_cache
def get_notifier() -> NotifierPort:
    return LogNotifier(history=settings.TOAST_HISTORY_SIZE)


@lru_cache
def get_push_channel() -> PushChannelPort:
    if _use_mocks() or not settings.REALTIME_CALLBACK_URL:
        return MockPushChannel()
    return PushSubscriptionClient()


@lru_cache
def get_realtime_bridge() -> RealtimeSyncBridge:
    return RealtimeSyncBridge(
        view=get_calendar_view(),
        notifier=get_notifier(),
        channel=get_push_channel(),
        room=settings.REALTIME_ROOM,
    )


async def shutdown() -> None:
    """Close adapter transports and drop the cached graph so the next startup builds a fresh one."""
    await get_push_channel().aclose()
    await get_admin_api().aclose()
    for factory in (
        get_realtime_bridge,
        get_push_channel,
        get_notifier,
        get_calendar_view,
        get_staff_options,
        get_admin_api,
    ):
        factory.cache_clear()
