from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import settings
from ..domain.types import DateString, TimestampString


try:
    LOCAL_ZONE = ZoneInfo(settings.TIMEZONE)
except ZoneInfoNotFoundError:
    LOCAL_ZONE = ZoneInfo("UTC")


class Clock(Protocol):
    def now(self) -> TimestampString: ...

    def today_local(self) -> DateString: ...


class IdProvider(Protocol):
    def next(self) -> str: ...


class SystemClock:
    """Wall clock: UTC timestamps, 'today' in the configured local zone."""

    def now(self) -> TimestampString:
        return TimestampString(datetime.now(timezone.utc).isoformat(timespec="milliseconds"))

    def today_local(self) -> DateString:
        return DateString(datetime.now(LOCAL_ZONE).date().isoformat())


class FixedClock:
    """Deterministic clock for tests; ``tick`` advances ``now`` by one second per call."""

    def __init__(self, today: str, now: str | None = None, tick: bool = True) -> None:
        self._today = DateString(today)
        self._now = datetime.fromisoformat(now or f"{today}T12:00:00+00:00")
        self._tick = tick

    def now(self) -> TimestampString:
        value = self._now
        if self._tick:
            self._now = self._now + timedelta(seconds=1)
        return TimestampString(value.isoformat(timespec="milliseconds"))

    def today_local(self) -> DateString:
        return self._today

    def set_today(self, today: str) -> None:
        self._today = DateString(today)


class UuidProvider:
    def next(self) -> str:
        return str(uuid.uuid4())


class SequentialIdProvider:
    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = 0

    def next(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter:04d}"
