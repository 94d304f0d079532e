"""Clock abstraction used to decide what "today" means."""

from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from hydration_tracker.domain.errors import ClockUnavailableError


class Clock(Protocol):
    """Single source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware time."""


@dataclass
class SystemClock(Clock):
    """Wall clock in a configured IANA timezone."""

    timezone_name: str = "UTC"
    tz: tzinfo = field(init=False)

    def __post_init__(self) -> None:
        try:
            self.tz = ZoneInfo(self.timezone_name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {self.timezone_name!r}") from exc

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        try:
            return datetime.now(tz=self.tz)
        except (OSError, OverflowError) as exc:
            raise ClockUnavailableError("System clock could not be read") from exc
