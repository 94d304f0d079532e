"""Intake service that owns the log and applies mutations."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from hydration_tracker.domain.errors import InvalidAmountError, InvalidGoalError
from hydration_tracker.domain.events import IntakeEvent, IntakeEventKind
from hydration_tracker.domain.intake import (
    DEFAULT_DAILY_GOAL_ML,
    DailySummary,
    IntakeEntry,
    IntakeSnapshot,
)
from hydration_tracker.services.clock import Clock
from hydration_tracker.services.intake_log import IntakeLog

logger = logging.getLogger(__name__)

IntakeListener = Callable[[IntakeEvent], None]


class IntakeRepository(Protocol):
    """Persistence interface for the intake log."""

    def load(self) -> IntakeSnapshot | None:
        """Return the stored snapshot, or None when nothing is stored."""

    def save(self, snapshot: IntakeSnapshot) -> None:
        """Persist the full snapshot."""


@dataclass
class IntakeService:
    """Sole owner of the intake log.

    Every operation runs under one lock. Mutations are all-or-nothing: input
    is validated before the log changes, and a failed summary read or save
    restores the previous state before the error propagates. Subscribers are
    notified only after a mutation has been saved.
    """

    log: IntakeLog
    repository: IntakeRepository
    _listeners: list[IntakeListener] = field(default_factory=list, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    @classmethod
    def open(
        cls,
        repository: IntakeRepository,
        clock: Clock,
        default_goal: int = DEFAULT_DAILY_GOAL_ML,
    ) -> "IntakeService":
        """Load the stored log, or start an empty one with the default goal."""
        snapshot = repository.load()
        if snapshot is None:
            logger.info("Starting empty intake log", extra={"goal": default_goal})
            log = IntakeLog(clock=clock, daily_goal=default_goal)
        else:
            log = IntakeLog.from_snapshot(snapshot, clock)
            logger.info(
                "Loaded intake log",
                extra={"entries": len(log.entries), "goal": log.daily_goal},
            )
        return cls(log=log, repository=repository)

    @property
    def daily_goal(self) -> int:
        """Return the current daily goal."""
        with self._lock:
            return self.log.daily_goal

    def today_entries(self) -> list[IntakeEntry]:
        """Return today's entries, newest first."""
        with self._lock:
            return self.log.today_entries()

    def today_total(self) -> int:
        """Return today's total in milliliters."""
        with self._lock:
            return self.log.today_total()

    def completion_percentage(self) -> float:
        """Return today's total divided by the goal."""
        with self._lock:
            return self.log.completion_percentage()

    def summary(self) -> DailySummary:
        """Return today's progress."""
        with self._lock:
            return self.log.summary()

    def add_water(self, amount: int) -> IntakeEntry:
        """Record an intake of the given amount at the current time."""
        with self._lock:
            before = self.log.snapshot()
            try:
                entry = self.log.append(amount)
            except InvalidAmountError:
                logger.warning("Rejected intake amount", extra={"amount": amount})
                raise
            summary = self._commit(before)
        logger.info(
            "Recorded intake",
            extra={"entry_id": entry.id, "amount": entry.amount},
        )
        self._notify(IntakeEvent(kind=IntakeEventKind.ADDED, summary=summary))
        return entry

    def reset_today_entries(self) -> int:
        """Remove every entry recorded today and return how many were removed."""
        with self._lock:
            before = self.log.snapshot()
            removed = self.log.remove_today()
            summary = self._commit(before)
        logger.info("Reset today's intake", extra={"removed": len(removed)})
        self._notify(IntakeEvent(kind=IntakeEventKind.RESET, summary=summary))
        return len(removed)

    def set_daily_goal(self, goal: int) -> None:
        """Replace the daily goal."""
        with self._lock:
            before = self.log.snapshot()
            try:
                self.log.set_daily_goal(goal)
            except InvalidGoalError:
                logger.warning("Rejected daily goal", extra={"goal": goal})
                raise
            summary = self._commit(before)
        logger.info("Updated daily goal", extra={"goal": goal})
        self._notify(IntakeEvent(kind=IntakeEventKind.GOAL_CHANGED, summary=summary))

    def subscribe(self, listener: IntakeListener) -> Callable[[], None]:
        """Register a mutation listener and return a callable that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, before: IntakeSnapshot) -> DailySummary:
        try:
            summary = self.log.summary()
            self.repository.save(self.log.snapshot())
        except Exception:
            logger.exception("Failed to commit intake log; rolling back")
            self.log.daily_goal = before.daily_goal
            self.log.entries = list(before.entries)
            self.log.next_id = before.next_id
            raise
        return summary

    def _notify(self, event: IntakeEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception(
                    "Intake listener failed", extra={"event": event.kind.value}
                )
