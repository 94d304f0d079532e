"""In-memory intake log with derived daily queries."""

from dataclasses import dataclass, field
from datetime import date, datetime

from hydration_tracker.domain.errors import InvalidAmountError, InvalidGoalError
from hydration_tracker.domain.intake import (
    DEFAULT_DAILY_GOAL_ML,
    DailySummary,
    IntakeEntry,
    IntakeSnapshot,
)
from hydration_tracker.services.clock import Clock


@dataclass
class IntakeLog:
    """Holds the daily goal and every recorded intake entry.

    "Today" is never cached: each query reads the clock and filters the
    entries whose timestamp falls on the clock's current calendar day, in the
    clock's timezone. Day rollover therefore needs no scheduled reset.
    """

    clock: Clock
    daily_goal: int = DEFAULT_DAILY_GOAL_ML
    entries: list[IntakeEntry] = field(default_factory=list)
    next_id: int = 1

    def __post_init__(self) -> None:
        validate_goal(self.daily_goal)

    @classmethod
    def from_snapshot(cls, snapshot: IntakeSnapshot, clock: Clock) -> "IntakeLog":
        """Rebuild a log from persisted state, rejecting invalid entries."""
        for entry in snapshot.entries:
            validate_amount(entry.amount)
        highest_id = max((entry.id for entry in snapshot.entries), default=0)
        return cls(
            clock=clock,
            daily_goal=snapshot.daily_goal,
            entries=list(snapshot.entries),
            next_id=max(snapshot.next_id, highest_id + 1),
        )

    def snapshot(self) -> IntakeSnapshot:
        """Return the serializable state of the log."""
        return IntakeSnapshot(
            daily_goal=self.daily_goal,
            entries=list(self.entries),
            next_id=self.next_id,
        )

    def today(self) -> date:
        """Return the current calendar day of the clock."""
        return self.clock.now().date()

    def today_entries(self) -> list[IntakeEntry]:
        """Return today's entries, newest first."""
        return self._entries_on(self.clock.now())

    def today_total(self) -> int:
        """Return today's total intake in milliliters."""
        return sum(entry.amount for entry in self.today_entries())

    def completion_percentage(self) -> float:
        """Return today's total as a ratio of the goal; may exceed 1.0."""
        return self.today_total() / self.daily_goal

    def summary(self) -> DailySummary:
        """Return today's progress computed from a single clock read."""
        now = self.clock.now()
        entries = self._entries_on(now)
        total = sum(entry.amount for entry in entries)
        return DailySummary(
            day=now.date(),
            daily_goal=self.daily_goal,
            total=total,
            completion_percentage=total / self.daily_goal,
            entries=entries,
        )

    def append(self, amount: int) -> IntakeEntry:
        """Record a new intake stamped with the current time."""
        validate_amount(amount)
        entry = IntakeEntry(id=self.next_id, amount=amount, timestamp=self.clock.now())
        self.entries.append(entry)
        self.next_id += 1
        return entry

    def remove_today(self) -> list[IntakeEntry]:
        """Remove today's entries and return them; other days are kept."""
        now = self.clock.now()
        today = now.date()
        removed = [e for e in self.entries if _local_day(e, now) == today]
        self.entries = [e for e in self.entries if _local_day(e, now) != today]
        return removed

    def set_daily_goal(self, goal: int) -> None:
        """Replace the daily goal."""
        validate_goal(goal)
        self.daily_goal = goal

    def _entries_on(self, now: datetime) -> list[IntakeEntry]:
        today = now.date()
        matching = [entry for entry in self.entries if _local_day(entry, now) == today]
        return sorted(
            matching, key=lambda entry: (entry.timestamp, entry.id), reverse=True
        )


def validate_amount(amount: object) -> None:
    """Raise InvalidAmountError unless amount is a positive integer."""
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(amount)


def validate_goal(goal: object) -> None:
    """Raise InvalidGoalError unless goal is a positive integer."""
    if isinstance(goal, bool) or not isinstance(goal, int) or goal <= 0:
        raise InvalidGoalError(goal)


def _local_day(entry: IntakeEntry, now: datetime) -> date:
    return entry.timestamp.astimezone(now.tzinfo).date()
