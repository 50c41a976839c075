"""Supabase repository for daily entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.daily import MIT_SLOTS, DailyEntry, MitTask
from health_tracker.errors import BackendError
from health_tracker.services.daily import DailyEntryRepository


@dataclass
class SupabaseDailyEntryRepository(DailyEntryRepository):
    """Supabase implementation for daily entries."""

    client: Client

    def get_entry(self, user_id: UUID, day: date) -> DailyEntry | None:
        """Return the entry for a user and date."""
        with supabase_call("load daily entry"):
            response = (
                self.client.table("daily_entries")
                .select("*")
                .eq("user_id", str(user_id))
                .eq("date", day.isoformat())
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_daily_entry(response.data[0])

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        """Return an entry by id."""
        with supabase_call("load daily entry"):
            response = (
                self.client.table("daily_entries")
                .select("*")
                .eq("id", str(entry_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return parse_daily_entry(response.data[0])

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        """Insert an entry; a concurrent insert for the same date is merged."""
        row = {"user_id": str(user_id), "date": day.isoformat(), **payload}
        with supabase_call("create daily entry"):
            response = (
                self.client.table("daily_entries")
                .upsert(row, on_conflict="user_id,date")
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to create daily entry")
        return parse_daily_entry(response.data[0])

    def update_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        """Apply a partial update to the entry for a date."""
        row = {**payload, "updated_at": datetime.now(tz=UTC).isoformat()}
        with supabase_call("update daily entry"):
            response = (
                self.client.table("daily_entries")
                .update(row)
                .eq("user_id", str(user_id))
                .eq("date", day.isoformat())
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to update daily entry")
        return parse_daily_entry(response.data[0])

    def list_entries(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        *,
        descending: bool = False,
    ) -> list[DailyEntry]:
        """Return entries in an inclusive date range."""
        query = self.client.table("daily_entries").select("*").eq(
            "user_id", str(user_id)
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        with supabase_call("list daily entries"):
            response = query.order("date", desc=descending).execute()
        return [parse_daily_entry(row) for row in response.data or []]


def parse_daily_entry(row: dict[str, object]) -> DailyEntry:
    """Build a daily entry from a ``daily_entries`` row."""
    weight = row.get("weight_kg")
    tasks = tuple(
        MitTask(
            description=row.get(f"mit_task_{slot}") or None,
            completed=bool(row.get(f"mit_task_{slot}_completed")),
        )
        for slot in MIT_SLOTS
    )
    return DailyEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])),
        weight_kg=float(weight) if weight is not None else None,
        calories_consumed=float(row.get("calories_consumed") or 0.0),
        calories_burned_exercise=float(row.get("calories_burned_exercise") or 0.0),
        calories_burned_bmr=float(row.get("calories_burned_bmr") or 0.0),
        protein_consumed_g=float(row.get("protein_consumed_g") or 0.0),
        carbs_consumed_g=float(row.get("carbs_consumed_g") or 0.0),
        fats_consumed_g=float(row.get("fats_consumed_g") or 0.0),
        mit_tasks=tasks,
        deep_work_completed=bool(row.get("deep_work_completed")),
        notes=row.get("notes"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
