"""Domain events emitted after intake log mutations."""

from dataclasses import dataclass
from enum import Enum

from hydration_tracker.domain.intake import DailySummary


class IntakeEventKind(Enum):
    """Kinds of intake log mutations."""

    ADDED = "added"
    RESET = "reset"
    GOAL_CHANGED = "goal_changed"


@dataclass(frozen=True)
class IntakeEvent:
    """Notification sent to subscribers after a committed mutation."""

    kind: IntakeEventKind
    summary: DailySummary
