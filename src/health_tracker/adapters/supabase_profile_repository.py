"""Supabase repository for user profiles."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.profiles import UserProfile
from health_tracker.errors import BackendError
from health_tracker.services.profiles import ProfileRepository

# The profiles table stores the latest weight as current_weight_kg.
_COLUMN_NAMES = {"weight_kg": "current_weight_kg"}


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user."""
        with supabase_call("load profile"):
            response = (
                self.client.table("user_profiles")
                .select("*")
                .eq("user_id", str(user_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def create_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        """Insert a profile row."""
        row = {"user_id": str(user_id), **_to_columns(payload)}
        with supabase_call("create profile"):
            response = self.client.table("user_profiles").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create profile")
        return _parse_profile(response.data[0])

    def update_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        """Apply a partial update."""
        row = {**_to_columns(payload), "updated_at": datetime.now(tz=UTC).isoformat()}
        with supabase_call("update profile"):
            response = (
                self.client.table("user_profiles")
                .update(row)
                .eq("user_id", str(user_id))
                .execute()
            )
        if not response.data:
            raise BackendError("Failed to update profile")
        return _parse_profile(response.data[0])

    def delete_profile(self, user_id: UUID) -> None:
        """Delete the profile row."""
        with supabase_call("delete profile"):
            self.client.table("user_profiles").delete().eq(
                "user_id", str(user_id)
            ).execute()


def _to_columns(payload: dict[str, object]) -> dict[str, object]:
    return {_COLUMN_NAMES.get(key, key): value for key, value in payload.items()}


def _parse_timestamp(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        email=row.get("email"),
        age=int(row.get("age") or 0),
        gender=row.get("gender") or "other",
        height_cm=float(row.get("height_cm") or 0.0),
        weight_kg=float(row.get("current_weight_kg") or 0.0),
        activity_level=row.get("activity_level") or "sedentary",
        bmr=int(row.get("bmr") or 0),
        tdee=int(row.get("tdee") or 0),
        calorie_target=int(row.get("calorie_target") or 0),
        protein_target_g=int(row.get("protein_target_g") or 0),
        carbs_target_g=int(row.get("carbs_target_g") or 0),
        fats_target_g=int(row.get("fats_target_g") or 0),
        units=row.get("units") or "metric",
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )
