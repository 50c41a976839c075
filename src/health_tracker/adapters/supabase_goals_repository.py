"""Supabase repository for milestones and weekly entries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.goals import ProgressMilestone, WeeklyEntry, WeeklyObjective
from health_tracker.errors import BackendError
from health_tracker.services.goals import OBJECTIVE_SLOTS, GoalsRepository


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for goals."""

    client: Client

    def create_milestone(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        """Insert a milestone."""
        row = {"user_id": str(user_id), **payload}
        with supabase_call("create milestone"):
            response = self.client.table("progress_milestones").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create milestone")
        return _parse_milestone(response.data[0])

    def get_milestone(self, milestone_id: UUID) -> ProgressMilestone | None:
        """Return a milestone by id."""
        with supabase_call("load milestone"):
            response = (
                self.client.table("progress_milestones")
                .select("*")
                .eq("id", str(milestone_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_milestone(response.data[0])

    def update_milestone(
        self, milestone_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        """Apply a partial update to a milestone."""
        row = {**payload, "updated_at": datetime.now(tz=UTC).isoformat()}
        with supabase_call("update milestone"):
            response = (
                self.client.table("progress_milestones")
                .update(row)
                .eq("id", str(milestone_id))
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to update milestone")
        return _parse_milestone(response.data[0])

    def list_milestones(self, user_id: UUID) -> list[ProgressMilestone]:
        """Return a user's milestones, newest first."""
        with supabase_call("list milestones"):
            response = (
                self.client.table("progress_milestones")
                .select("*")
                .eq("user_id", str(user_id))
                .order("created_at", desc=True)
                .execute()
            )
        return [_parse_milestone(row) for row in response.data or []]

    def get_weekly_entry(self, user_id: UUID, start: date) -> WeeklyEntry | None:
        """Return the weekly entry starting on ``start``."""
        with supabase_call("load weekly entry"):
            response = (
                self.client.table("weekly_entries")
                .select("*")
                .eq("user_id", str(user_id))
                .eq("week_start_date", start.isoformat())
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_weekly(response.data[0])

    def save_weekly_entry(
        self, user_id: UUID, start: date, payload: dict[str, object]
    ) -> WeeklyEntry:
        """Upsert the weekly entry for ``start``."""
        row = {
            "user_id": str(user_id),
            "week_start_date": start.isoformat(),
            **payload,
            "updated_at": datetime.now(tz=UTC).isoformat(),
        }
        with supabase_call("save weekly entry"):
            response = (
                self.client.table("weekly_entries")
                .upsert(row, on_conflict="user_id,week_start_date")
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to save weekly entry")
        return _parse_weekly(response.data[0])

    def list_weekly_entries(self, user_id: UUID, start: date) -> list[WeeklyEntry]:
        """Return weekly entries from ``start`` onward."""
        with supabase_call("list weekly entries"):
            response = (
                self.client.table("weekly_entries")
                .select("*")
                .eq("user_id", str(user_id))
                .gte("week_start_date", start.isoformat())
                .order("week_start_date", desc=False)
                .execute()
            )
        return [_parse_weekly(row) for row in response.data or []]


def _parse_date(value: object) -> date | None:
    if isinstance(value, str) and value:
        return date.fromisoformat(value[:10])
    return None


def _parse_milestone(row: dict[str, object]) -> ProgressMilestone:
    created_at = row.get("created_at")
    return ProgressMilestone(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        category=row.get("category") or "skill",
        description=str(row.get("description") or ""),
        target_date=_parse_date(row.get("target_date")),
        completed_date=_parse_date(row.get("completed_date")),
        is_completed=bool(row.get("is_completed")),
        progress_percentage=float(row.get("progress_percentage") or 0.0),
        notes=row.get("notes"),
        created_at=(
            datetime.fromisoformat(created_at)
            if isinstance(created_at, str) and created_at
            else None
        ),
    )


def _parse_weekly(row: dict[str, object]) -> WeeklyEntry:
    rate = row.get("completion_rate")
    objectives = tuple(
        WeeklyObjective(
            description=row.get(f"objective_{slot}") or None,
            completed=bool(row.get(f"objective_{slot}_completed")),
        )
        for slot in OBJECTIVE_SLOTS
    )
    return WeeklyEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        week_start_date=date.fromisoformat(str(row["week_start_date"])),
        objectives=objectives,
        completion_rate=float(rate) if rate is not None else None,
        insights=row.get("insights"),
        next_week_focus=row.get("next_week_focus"),
        review_date=_parse_date(row.get("review_date")),
    )
