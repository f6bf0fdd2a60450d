"""Injectable time source so every "now"-dependent calculation is testable"""

from datetime import datetime, timezone
from typing import Protocol

from tenant_insights.utils.date_utils import to_utc


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall-clock time in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Always returns the same instant (tests, report re-generation)"""

    def __init__(self, instant: datetime):
        self.instant = to_utc(instant)

    def now(self) -> datetime:
        return self.instant
