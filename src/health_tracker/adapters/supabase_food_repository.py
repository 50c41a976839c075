"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.daily import DailyEntry
from health_tracker.domain.food import FoodEntry
from health_tracker.errors import BackendError
from health_tracker.services.food import FoodEntryRepository

_SELECT = "*, daily_entries(date)"


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entries."""

    client: Client

    def create_food_entry(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> FoodEntry:
        """Insert a food entry under a daily entry."""
        row = {
            "user_id": str(daily_entry.user_id),
            "daily_entry_id": str(daily_entry.id),
            **payload,
        }
        with supabase_call("create food entry"):
            response = self.client.table("food_entries").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create food entry")
        return _parse_entry(response.data[0], daily_entry.date)

    def get_food_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return a food entry by id."""
        with supabase_call("load food entry"):
            response = (
                self.client.table("food_entries")
                .select(_SELECT)
                .eq("id", str(entry_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_food_entries(self, daily_entry_id: UUID) -> list[FoodEntry]:
        """Return a daily entry's food entries."""
        with supabase_call("list food entries"):
            response = (
                self.client.table("food_entries")
                .select(_SELECT)
                .eq("daily_entry_id", str(daily_entry_id))
                .order("consumed_at", desc=False)
                .execute()
            )
        return [_parse_entry(row) for row in response.data or []]

    def update_food_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodEntry:
        """Apply a partial update to a food entry."""
        with supabase_call("update food entry"):
            self.client.table("food_entries").update(payload).eq(
                "id", str(entry_id)
            ).execute()
        updated = self.get_food_entry(entry_id)
        if updated is None:
            raise BackendError("Failed to update food entry")
        return updated

    def delete_food_entry(self, entry_id: UUID) -> None:
        """Delete a food entry."""
        with supabase_call("delete food entry"):
            self.client.table("food_entries").delete().eq(
                "id", str(entry_id)
            ).execute()


def _parse_entry(row: dict[str, object], entry_date: date | None = None) -> FoodEntry:
    if entry_date is None:
        joined = row.get("daily_entries") or {}
        entry_date = date.fromisoformat(str(joined["date"]))
    return FoodEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        daily_entry_id=UUID(str(row["daily_entry_id"])),
        entry_date=entry_date,
        name=str(row.get("name") or ""),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
        amount=float(row.get("amount") or 0.0),
        unit=str(row.get("unit") or ""),
        meal_type=row.get("meal_type") or "snack",
        consumed_at=datetime.fromisoformat(str(row["consumed_at"])),
    )
