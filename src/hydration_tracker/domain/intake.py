"""Domain models for water intake logging."""

from dataclasses import dataclass
from datetime import date, datetime

DEFAULT_DAILY_GOAL_ML = 2000


@dataclass(frozen=True)
class IntakeEntry:
    """A single recorded water intake event."""

    id: int
    amount: int
    timestamp: datetime


@dataclass(frozen=True)
class IntakeSnapshot:
    """Serializable state of an intake log."""

    daily_goal: int
    entries: list[IntakeEntry]
    next_id: int


@dataclass(frozen=True)
class DailySummary:
    """Today's progress toward the daily goal."""

    day: date
    daily_goal: int
    total: int
    completion_percentage: float
    entries: list[IntakeEntry]
