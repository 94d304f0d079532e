"""Supabase repository for the intake log."""

from dataclasses import dataclass
from datetime import UTC, datetime

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from hydration_tracker.adapters.json_file_intake_repository import (
    parse_entry,
    parse_int,
)
from hydration_tracker.domain.errors import StorageError
from hydration_tracker.domain.intake import IntakeEntry, IntakeSnapshot
from hydration_tracker.services.intake import IntakeRepository
from hydration_tracker.services.intake_log import validate_goal

SETTINGS_ROW_ID = 1


@dataclass
class SupabaseIntakeRepository(IntakeRepository):
    """Supabase implementation backed by settings and entry tables."""

    client: Client

    def load(self) -> IntakeSnapshot | None:
        """Return the stored snapshot, or None before the first save."""
        try:
            settings = (
                self.client.table("intake_settings")
                .select("daily_goal, next_id")
                .eq("id", SETTINGS_ROW_ID)
                .limit(1)
                .execute()
            )
            if not settings.data:
                return None
            rows = (
                self.client.table("intake_entries")
                .select("id, amount_ml, consumed_at")
                .order("consumed_at", desc=False)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError("Could not load intake log from Supabase") from exc
        try:
            settings_row = settings.data[0]
            daily_goal = parse_int(settings_row["daily_goal"])
            validate_goal(daily_goal)
            return IntakeSnapshot(
                daily_goal=daily_goal,
                entries=[_parse_entry(row) for row in rows.data or []],
                next_id=parse_int(settings_row.get("next_id") or 1),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise StorageError("Malformed intake log rows in Supabase") from exc

    def save(self, snapshot: IntakeSnapshot) -> None:
        """Sync the settings row and the entry rows with the snapshot."""
        try:
            self.client.table("intake_settings").upsert(
                {
                    "id": SETTINGS_ROW_ID,
                    "daily_goal": snapshot.daily_goal,
                    "next_id": snapshot.next_id,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            ).execute()
            response = self.client.table("intake_entries").select("id").execute()
            stored_ids = {int(row["id"]) for row in response.data or []}
            wanted_ids = {entry.id for entry in snapshot.entries}
            stale_ids = sorted(stored_ids - wanted_ids)
            if stale_ids:
                self.client.table("intake_entries").delete().in_(
                    "id", stale_ids
                ).execute()
            new_rows = [
                _serialize_entry(entry)
                for entry in snapshot.entries
                if entry.id not in stored_ids
            ]
            if new_rows:
                self.client.table("intake_entries").insert(new_rows).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise StorageError("Could not save intake log to Supabase") from exc


def _serialize_entry(entry: IntakeEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "amount_ml": entry.amount,
        "consumed_at": entry.timestamp.isoformat(),
    }


def _parse_entry(row: dict[str, object]) -> IntakeEntry:
    return parse_entry(row["id"], row["amount_ml"], row["consumed_at"])
