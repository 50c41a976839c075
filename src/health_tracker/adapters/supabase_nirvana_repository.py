"""Supabase repository for Nirvana sessions."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.nirvana import NirvanaSession
from health_tracker.errors import BackendError
from health_tracker.services.nirvana import NirvanaRepository


@dataclass
class SupabaseNirvanaRepository(NirvanaRepository):
    """Supabase implementation for Nirvana sessions."""

    client: Client

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NirvanaSession:
        """Insert a session."""
        row = {"user_id": str(user_id), **payload}
        with supabase_call("create nirvana session"):
            response = self.client.table("nirvana_sessions").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create nirvana session")
        return _parse_session(response.data[0])

    def list_sessions(
        self, user_id: UUID, start: date | None = None
    ) -> list[NirvanaSession]:
        """Return sessions on or after ``start``."""
        query = (
            self.client.table("nirvana_sessions")
            .select("*")
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("session_date", start.isoformat())
        with supabase_call("list nirvana sessions"):
            response = query.order("session_date", desc=False).execute()
        return [_parse_session(row) for row in response.data or []]


def _parse_session(row: dict[str, object]) -> NirvanaSession:
    return NirvanaSession(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        session_date=date.fromisoformat(str(row["session_date"])),
        session_type=str(row.get("session_type") or ""),
        duration_minutes=float(row.get("duration_minutes") or 0.0),
        difficulty=row.get("difficulty") or "beginner",
        quality_rating=int(row.get("quality_rating") or 0),
        exercises=list(row.get("exercises") or []),
        body_parts=list(row.get("body_parts") or []),
        notes=row.get("notes"),
    )
