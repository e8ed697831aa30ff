from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from salon_calendar.domain.entities.calendar_range import CalendarRange

DEFAULT_BUSINESS_TIMEZONE = "Europe/Istanbul"

_DAY_KEY_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_HHMM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


class LocalCalendar:
    """
    Date arithmetic in the business timezone.

    Instants are aware datetimes (normalized to UTC on output). Local days are
    identified by day keys ("YYYY-MM-DD"). Day offsets are applied to local
    calendar dates and re-localized, so day boundaries stay on local midnight
    even in zones that observe DST; for a fixed-offset zone this is the same
    as adding n * 24h.
    """

    def __init__(self, timezone_name: str | ZoneInfo = DEFAULT_BUSINESS_TIMEZONE) -> None:
        if isinstance(timezone_name, ZoneInfo):
            self._tz = timezone_name
        else:
            self._tz = ZoneInfo(timezone_name)

    @property
    def timezone(self) -> ZoneInfo:
        return self._tz

    def to_local(self, instant: datetime) -> datetime:
        return as_utc(instant).astimezone(self._tz)

    def to_local_fields(self, instant: datetime) -> tuple[int, int, int]:
        local = self.to_local(instant)
        return (local.year, local.month, local.day)

    def to_local_clock(self, instant: datetime) -> tuple[int, int]:
        local = self.to_local(instant)
        return (local.hour, local.minute)

    def local_date(self, instant: datetime) -> date:
        return self.to_local(instant).date()

    def day_key(self, instant: datetime | date) -> str:
        if isinstance(instant, datetime):
            year, month, day = self.to_local_fields(instant)
        else:
            year, month, day = instant.year, instant.month, instant.day
        return f"{year:04d}-{month:02d}-{day:02d}"

    def start_of_local_day(self, day: str | date) -> datetime:
        if isinstance(day, str):
            day = parse_day_key(day)
        return datetime.combine(day, time.min, tzinfo=self._tz).astimezone(timezone.utc)

    def start_of_day(self, instant: datetime) -> datetime:
        return self.start_of_local_day(self.local_date(instant))

    def add_days(self, instant: datetime, days: int) -> datetime:
        local = self.to_local(instant)
        shifted = local.replace(tzinfo=None) + timedelta(days=int(days))
        return shifted.replace(tzinfo=self._tz).astimezone(timezone.utc)

    def start_of_week(self, instant: datetime) -> datetime:
        day = self.local_date(instant)
        weekday_mon0 = day.weekday()  # Mon=0..Sun=6
        return self.add_days(self.start_of_local_day(day), -weekday_mon0)

    def end_exclusive_of_day(self, instant: datetime) -> datetime:
        return self.add_days(self.start_of_day(instant), 1)

    def time_on_day(self, day: str | date, hhmm: str | None) -> datetime | None:
        """Instant of a local wall-clock time ("HH:MM") on a given day, or None if unparsable."""
        if not day or not hhmm:
            return None
        match = _HHMM_RE.match(str(hhmm))
        if not match:
            return None
        hour, minute = int(match.group(1)), int(match.group(2))
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            return None
        try:
            if isinstance(day, str):
                day = parse_day_key(day)
        except ValueError:
            return None
        local = datetime.combine(day, time(hour, minute), tzinfo=self._tz)
        return local.astimezone(timezone.utc)

    def day_key_in_range(self, day_key: str | None, calendar_range: CalendarRange) -> bool:
        if not day_key:
            return False
        try:
            start = self.start_of_local_day(day_key)
        except ValueError:
            return False
        return calendar_range.contains(start)

    def today(self, now: datetime | None = None) -> date:
        if now is None:
            now = datetime.now(timezone.utc)
        return self.local_date(now)

    def today_key(self, now: datetime | None = None) -> str:
        return self.day_key(self.today(now))

    def format_hhmm(self, instant: datetime) -> str:
        hour, minute = self.to_local_clock(instant)
        return f"{hour:02d}:{minute:02d}"


def parse_day_key(day_key: str) -> date:
    match = _DAY_KEY_RE.match(str(day_key or "").strip())
    if not match:
        raise ValueError(f"Invalid day key: {day_key!r}")
    return date(int(match.group(1)), int(match.group(2)), int(match.group(3)))


def as_utc(instant: datetime) -> datetime:
    # Naive datetimes coming from collaborators are UTC by contract
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)
