"""In-memory repository for the intake log."""

from dataclasses import dataclass

from hydration_tracker.domain.intake import IntakeSnapshot
from hydration_tracker.services.intake import IntakeRepository


@dataclass
class InMemoryIntakeRepository(IntakeRepository):
    """Keeps the last saved snapshot for the process lifetime."""

    snapshot: IntakeSnapshot | None = None

    def load(self) -> IntakeSnapshot | None:
        """Return the last saved snapshot."""
        return self.snapshot

    def save(self, snapshot: IntakeSnapshot) -> None:
        """Replace the stored snapshot."""
        self.snapshot = snapshot
