"""Supabase repository for exercise entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.daily import DailyEntry
from health_tracker.domain.exercise import ExerciseEntry
from health_tracker.errors import BackendError
from health_tracker.services.exercise import ExerciseRepository

# Exercises belong to the day of their parent daily entry.
_SELECT = "*, daily_entries!inner(date)"


@dataclass
class SupabaseExerciseRepository(ExerciseRepository):
    """Supabase implementation for exercise entries."""

    client: Client

    def create_exercise(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> ExerciseEntry:
        """Insert an exercise under a daily entry."""
        row = {
            "user_id": str(daily_entry.user_id),
            "daily_entry_id": str(daily_entry.id),
            **payload,
        }
        with supabase_call("create exercise entry"):
            response = self.client.table("exercise_entries").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create exercise entry")
        return _parse_exercise(response.data[0], daily_entry.date)

    def get_exercise(self, exercise_id: UUID) -> ExerciseEntry | None:
        """Return an exercise by id."""
        with supabase_call("load exercise entry"):
            response = (
                self.client.table("exercise_entries")
                .select(_SELECT)
                .eq("id", str(exercise_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_exercise(response.data[0])

    def list_exercises(self, daily_entry_id: UUID) -> list[ExerciseEntry]:
        """Return a daily entry's exercises."""
        with supabase_call("list exercise entries"):
            response = (
                self.client.table("exercise_entries")
                .select(_SELECT)
                .eq("daily_entry_id", str(daily_entry_id))
                .order("performed_at", desc=False)
                .execute()
            )
        return [_parse_exercise(row) for row in response.data or []]

    def list_exercises_since(self, user_id: UUID, start: date) -> list[ExerciseEntry]:
        """Return exercises logged on days from ``start`` onward."""
        with supabase_call("list exercise entries"):
            response = (
                self.client.table("exercise_entries")
                .select(_SELECT)
                .eq("user_id", str(user_id))
                .gte("daily_entries.date", start.isoformat())
                .order("performed_at", desc=False)
                .execute()
            )
        return [_parse_exercise(row) for row in response.data or []]

    def delete_exercise(self, exercise_id: UUID) -> None:
        """Delete an exercise."""
        with supabase_call("delete exercise entry"):
            self.client.table("exercise_entries").delete().eq(
                "id", str(exercise_id)
            ).execute()


def _parse_exercise(
    row: dict[str, object], entry_date: date | None = None
) -> ExerciseEntry:
    if entry_date is None:
        joined = row.get("daily_entries") or {}
        entry_date = date.fromisoformat(str(joined["date"]))
    return ExerciseEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        daily_entry_id=UUID(str(row["daily_entry_id"])),
        entry_date=entry_date,
        name=str(row.get("name") or ""),
        category=row.get("category") or "cardio",
        met_value=float(row.get("met_value") or 0.0),
        duration_minutes=float(row.get("duration_minutes") or 0.0),
        calories_burned=float(row.get("calories_burned") or 0.0),
        intensity=row.get("intensity") or "moderate",
        performed_at=datetime.fromisoformat(str(row["performed_at"])),
        notes=row.get("notes"),
    )
