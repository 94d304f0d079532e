"""JSON file repository for the intake log."""

import json
import logging
import os
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from hydration_tracker.domain.errors import StorageError
from hydration_tracker.domain.intake import IntakeEntry, IntakeSnapshot
from hydration_tracker.services.intake import IntakeRepository
from hydration_tracker.services.intake_log import validate_amount, validate_goal

logger = logging.getLogger(__name__)


@dataclass
class JsonFileIntakeRepository(IntakeRepository):
    """Stores the whole log as one JSON document on local disk."""

    path: Path

    def load(self) -> IntakeSnapshot | None:
        """Read the snapshot from disk, or None if the file does not exist."""
        if not self.path.exists():
            return None
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
            return snapshot_from_dict(payload)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise StorageError(f"Could not read intake log at {self.path}") from exc

    def save(self, snapshot: IntakeSnapshot) -> None:
        """Write the snapshot atomically via a temporary file."""
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(snapshot_to_dict(snapshot), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise StorageError(f"Could not write intake log at {self.path}") from exc
        logger.debug("Saved intake log", extra={"path": str(self.path)})


def snapshot_to_dict(snapshot: IntakeSnapshot) -> dict[str, object]:
    """Convert a snapshot into a JSON-compatible dict."""
    return {
        "daily_goal": snapshot.daily_goal,
        "next_id": snapshot.next_id,
        "entries": [
            {
                "id": entry.id,
                "amount": entry.amount,
                "timestamp": entry.timestamp.isoformat(),
            }
            for entry in snapshot.entries
        ],
    }


def snapshot_from_dict(payload: object) -> IntakeSnapshot:
    """Build a snapshot from a decoded JSON document."""
    if not isinstance(payload, dict):
        raise ValueError("intake log document must be an object")
    raw_entries = payload.get("entries") or []
    if not isinstance(raw_entries, list):
        raise ValueError("entries must be a list")
    entries = [
        parse_entry(row["id"], row["amount"], row["timestamp"]) for row in raw_entries
    ]
    daily_goal = parse_int(payload["daily_goal"])
    validate_goal(daily_goal)
    return IntakeSnapshot(
        daily_goal=daily_goal,
        entries=entries,
        next_id=parse_int(payload.get("next_id", 1)),
    )


def parse_entry(
    raw_id: object, raw_amount: object, raw_timestamp: object
) -> IntakeEntry:
    """Build a stored entry, rejecting non-integer or non-positive amounts."""
    amount = parse_int(raw_amount)
    validate_amount(amount)
    return IntakeEntry(
        id=parse_int(raw_id),
        amount=amount,
        timestamp=parse_timestamp(str(raw_timestamp)),
    )


def parse_int(value: object) -> int:
    """Return value as an int; booleans, floats and strings are rejected."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"expected an integer, got {value!r}")
    return value


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed
