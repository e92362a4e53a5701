"""Clock abstraction for date-dependent policies."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    """Source of the current instant."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class SystemClock(Clock):
    """Wall clock in the user's timezone."""

    timezone_name: str = "UTC"

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return datetime.now(tz=ZoneInfo(self.timezone_name))
