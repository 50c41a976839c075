"""Supabase repository for food templates."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_errors import supabase_call
from health_tracker.domain.food import FoodTemplate
from health_tracker.errors import BackendError
from health_tracker.services.food import FoodTemplateRepository


@dataclass
class SupabaseFoodTemplateRepository(FoodTemplateRepository):
    """Supabase implementation for food templates."""

    client: Client

    def create_template(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodTemplate:
        """Insert a template."""
        row = {"user_id": str(user_id), "usage_count": 0, **payload}
        with supabase_call("create food template"):
            response = self.client.table("food_templates").insert(row).execute()
        if not response.data:
            raise BackendError("Failed to create food template")
        return _parse_template(response.data[0])

    def get_template(self, template_id: UUID) -> FoodTemplate | None:
        """Return a template by id."""
        with supabase_call("load food template"):
            response = (
                self.client.table("food_templates")
                .select("*")
                .eq("id", str(template_id))
                .limit(1)
                .execute()
            )
        if not response.data:
            return None
        return _parse_template(response.data[0])

    def list_templates(self, user_id: UUID) -> list[FoodTemplate]:
        """Return a user's templates, most used first."""
        with supabase_call("list food templates"):
            response = (
                self.client.table("food_templates")
                .select("*")
                .eq("user_id", str(user_id))
                .order("usage_count", desc=True)
                .execute()
            )
        return [_parse_template(row) for row in response.data or []]

    def increment_usage(self, template_id: UUID, used_at: datetime) -> None:
        """Bump the usage counter with a read-then-write."""
        template = self.get_template(template_id)
        if template is None:
            return
        with supabase_call("update food template usage"):
            self.client.table("food_templates").update(
                {
                    "usage_count": template.usage_count + 1,
                    "last_used": used_at.isoformat(),
                }
            ).eq("id", str(template_id)).execute()

    def delete_template(self, template_id: UUID) -> None:
        """Delete a template."""
        with supabase_call("delete food template"):
            self.client.table("food_templates").delete().eq(
                "id", str(template_id)
            ).execute()


def _parse_template(row: dict[str, object]) -> FoodTemplate:
    last_used = row.get("last_used")
    return FoodTemplate(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein_g") or 0.0),
        carbs_g=float(row.get("carbs_g") or 0.0),
        fats_g=float(row.get("fats_g") or 0.0),
        default_amount=float(row.get("default_amount") or 0.0),
        default_unit=str(row.get("default_unit") or ""),
        category=row.get("category") or "meal",
        is_favorite=bool(row.get("is_favorite")),
        usage_count=int(row.get("usage_count") or 0),
        last_used=(
            datetime.fromisoformat(last_used)
            if isinstance(last_used, str) and last_used
            else None
        ),
    )
