"""Supabase repository for injectable compounds and injections."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.injections import InjectableCompound, InjectionEntry
from health_tracker.errors import BackendError
from health_tracker.services.injections import InjectionRepository

_INJECTION_SELECT = "*, injectable_compounds(name, weekly_target_mg)"


@dataclass
class SupabaseInjectionRepository(InjectionRepository):
    """Supabase implementation for compounds and injections."""

    client: Client

    def create_compound(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        """Insert a compound."""
        row = {"user_id": str(user_id), **payload}
        with supabase_call("create compound"):
            response = self.client.table("injectable_compounds").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create compound")
        return _parse_compound(response.data[0])

    def get_compound(self, compound_id: UUID) -> InjectableCompound | None:
        """Return a compound by id."""
        with supabase_call("load compound"):
            response = (
                self.client.table("injectable_compounds")
                .select("*")
                .eq("id", str(compound_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_compound(response.data[0])

    def list_compounds(self, user_id: UUID) -> list[InjectableCompound]:
        """Return a user's compounds by name."""
        with supabase_call("list compounds"):
            response = (
                self.client.table("injectable_compounds")
                .select("*")
                .eq("user_id", str(user_id))
                .order("name", desc=False)
                .execute()
            )
        return [_parse_compound(row) for row in response.data or []]

    def update_compound(
        self, compound_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        """Apply a partial update to a compound."""
        row = {**payload, "updated_at": datetime.now(tz=UTC).isoformat()}
        with supabase_call("update compound"):
            response = (
                self.client.table("injectable_compounds")
                .update(row)
                .eq("id", str(compound_id))
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to update compound")
        return _parse_compound(response.data[0])

    def delete_compound(self, compound_id: UUID) -> None:
        """Delete a compound."""
        with supabase_call("delete compound"):
            self.client.table("injectable_compounds").delete().eq(
                "id", str(compound_id)
            ).execute()

    def create_injection(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectionEntry:
        """Insert an injection and reload it with its compound."""
        row = {"user_id": str(user_id), **payload}
        with supabase_call("create injection"):
            response = self.client.table("injection_entries").insert(row).execute()
            if not response.data:
                raise BackendError("Failed to create injection")
            joined = (
                self.client.table("injection_entries")
                .select(_INJECTION_SELECT)
                .eq("id", str(response.data[0]["id"]))
                .limit(1)
                .execute()
            )
        if not joined.data:
            raise BackendError("Failed to load injection")
        return _parse_injection(joined.data[0])

    def list_injections(
        self, user_id: UUID, start: date | None = None
    ) -> list[InjectionEntry]:
        """Return injections joined with compound name and weekly target."""
        query = (
            self.client.table("injection_entries")
            .select(_INJECTION_SELECT)
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("injection_date", start.isoformat())
        with supabase_call("list injections"):
            response = query.order("injection_date", desc=False).execute()
        return [_parse_injection(row) for row in response.data or []]

    def get_injection(self, injection_id: UUID) -> InjectionEntry | None:
        """Return an injection by id, joined with its compound."""
        with supabase_call("load injection"):
            response = (
                self.client.table("injection_entries")
                .select(_INJECTION_SELECT)
                .eq("id", str(injection_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_injection(response.data[0])

    def delete_injection(self, injection_id: UUID) -> None:
        """Delete an injection."""
        with supabase_call("delete injection"):
            self.client.table("injection_entries").delete().eq(
                "id", str(injection_id)
            ).execute()


def _parse_compound(row: dict[str, object]) -> InjectableCompound:
    return InjectableCompound(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        concentration=float(row.get("concentration") or 0.0),
        ester_type=row.get("ester_type") or "cypionate",
        half_life_days=float(row.get("half_life_days") or 0.0),
        category=row.get("category") or "other",
        weekly_target_mg=float(row.get("weekly_target_mg") or 0.0),
        notes=row.get("notes"),
    )


def _parse_injection(row: dict[str, object]) -> InjectionEntry:
    compound = row.get("injectable_compounds") or {}
    return InjectionEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        compound_id=UUID(str(row["compound_id"])),
        dose_mg=float(row.get("dose_mg") or 0.0),
        volume_ml=float(row.get("volume_ml") or 0.0),
        injection_site=row.get("injection_site") or "left_glute",
        injection_date=date.fromisoformat(str(row["injection_date"])),
        compound_name=compound.get("name"),
        compound_weekly_target_mg=float(compound.get("weekly_target_mg") or 0.0),
        notes=row.get("notes"),
    )
