"""
Wall-clock access pinned to the game timezone.

Every season id, calendar day, Saturday-based week id and league day is derived
here so the rest of the engine never builds dates on its own. Tests swap in a
``FixedClock``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytz

from flagdash.core.config import settings


def _tz(name: str | None = None):
    return pytz.timezone(name or settings.TIMEZONE)


def to_epoch_ms(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)


def from_epoch_ms(ms: int) -> datetime:
    return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)


def season_id_for(local_dt: datetime) -> str:
    return f"{local_dt.year}-{local_dt.month:02d}"


def saturday_week_start(day: date) -> date:
    # weekday(): Mon=0 .. Sat=5, Sun=6
    return day - timedelta(days=(day.weekday() - 5) % 7)


def week_id_for(day: date) -> str:
    return saturday_week_start(day).isoformat()


def league_day_for(day: date) -> int:
    """Saturday=1 ... Friday=7."""
    return (day - saturday_week_start(day)).days + 1


class Clock:
    def __init__(self, tz_name: str | None = None):
        self.tz = _tz(tz_name)

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def now(self) -> datetime:
        return self.utcnow().astimezone(self.tz)

    def now_ms(self) -> int:
        return to_epoch_ms(self.utcnow())

    def local(self, ms: int) -> datetime:
        return from_epoch_ms(ms).astimezone(self.tz)

    def local_date(self, ms: int) -> date:
        return self.local(ms).date()

    def today(self) -> date:
        return self.now().date()

    def yesterday(self) -> date:
        return self.today() - timedelta(days=1)

    def today_str(self) -> str:
        return self.today().isoformat()

    def season_id(self) -> str:
        return season_id_for(self.now())

    def week_id(self) -> str:
        return week_id_for(self.today())

    def league_day(self) -> int:
        return league_day_for(self.today())

    def weekday(self) -> int:
        """0=Sunday ... 6=Saturday."""
        return (self.today().weekday() + 1) % 7


class FixedClock(Clock):
    def __init__(self, instant: datetime, tz_name: str | None = None):
        super().__init__(tz_name)
        self.set(instant)

    def set(self, instant: datetime):
        if instant.tzinfo is None:
            instant = self.tz.localize(instant)
        self._instant = instant.astimezone(timezone.utc)

    def advance(self, **kwargs):
        self._instant = self._instant + timedelta(**kwargs)

    def utcnow(self) -> datetime:
        return self._instant
