"""Food logging, daily nutrition totals and reusable templates."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time
from typing import Protocol
from uuid import UUID

from health_tracker.domain.daily import DailyEntry, DailyEntryUpdate, NutritionTotals
from health_tracker.domain.food import (
    MEAL_TYPES,
    TEMPLATE_CATEGORIES,
    FoodEntry,
    FoodEntryCreate,
    FoodEntryUpdate,
    FoodTemplate,
    MealType,
    TemplateCategory,
)
from health_tracker.errors import EntityNotFoundError
from health_tracker.services.daily import DailyEntryService
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_optional_number,
    require_text,
)

logger = logging.getLogger(__name__)


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def create_food_entry(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> FoodEntry:
        """Insert a food entry under a daily entry and return it."""

    def get_food_entry(self, entry_id: UUID) -> FoodEntry | None:
        """Return a food entry by id, if present."""

    def list_food_entries(self, daily_entry_id: UUID) -> list[FoodEntry]:
        """Return a daily entry's food entries ordered by consumed_at."""

    def update_food_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodEntry:
        """Apply a partial update and return the entry."""

    def delete_food_entry(self, entry_id: UUID) -> None:
        """Delete a food entry."""


class FoodTemplateRepository(Protocol):
    """Persistence interface for food templates."""

    def create_template(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodTemplate:
        """Insert a template and return it."""

    def get_template(self, template_id: UUID) -> FoodTemplate | None:
        """Return a template by id, if present."""

    def list_templates(self, user_id: UUID) -> list[FoodTemplate]:
        """Return a user's templates."""

    def increment_usage(self, template_id: UUID, used_at: datetime) -> None:
        """Bump a template's usage counter and last-used timestamp."""

    def delete_template(self, template_id: UUID) -> None:
        """Delete a template."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class FoodService:
    """Application service for food entries and templates."""

    daily_service: DailyEntryService
    repository: FoodEntryRepository
    template_repository: FoodTemplateRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def add_food_entry(
        self, user_id: UUID, day: date, data: FoodEntryCreate
    ) -> FoodEntry:
        """Log a food for a day and refresh the day's totals."""
        payload = _validate_create(data)
        payload["consumed_at"] = (
            data.consumed_at or timestamp_for_day(day, self.clock())
        ).isoformat()
        daily_entry = self.daily_service.get_or_create(user_id, day)
        created = self.repository.create_food_entry(daily_entry, payload)
        self.recompute_daily_totals(user_id, day)
        return created

    def list_for_day(self, user_id: UUID, day: date) -> list[FoodEntry]:
        """Return the day's food entries; empty when nothing was logged."""
        daily_entry = self.daily_service.get_entry(user_id, day)
        if daily_entry is None:
            return []
        return self.repository.list_food_entries(daily_entry.id)

    def update_food_entry(
        self, user_id: UUID, entry_id: UUID, update: FoodEntryUpdate
    ) -> FoodEntry:
        """Edit one of the user's food entries and refresh its day's totals."""
        existing = self._require_own_entry(user_id, entry_id)
        payload = _validate_update(update)
        if not payload:
            return existing
        updated = self.repository.update_food_entry(entry_id, payload)
        self.recompute_daily_totals(existing.user_id, existing.entry_date)
        return updated

    def delete_food_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete one of the user's food entries and refresh its day's totals."""
        existing = self._require_own_entry(user_id, entry_id)
        self.repository.delete_food_entry(entry_id)
        self.recompute_daily_totals(existing.user_id, existing.entry_date)

    def recompute_daily_totals(self, user_id: UUID, day: date) -> NutritionTotals:
        """Rewrite the day's nutrition totals as the sum of its food entries."""
        daily_entry = self.daily_service.get_or_create(user_id, day)
        totals = sum_food_entries(self.repository.list_food_entries(daily_entry.id))
        self.daily_service.upsert(
            user_id,
            day,
            DailyEntryUpdate(
                calories_consumed=totals.calories,
                protein_consumed_g=totals.protein_g,
                carbs_consumed_g=totals.carbs_g,
                fats_consumed_g=totals.fats_g,
            ),
        )
        logger.debug(
            "Recomputed daily totals",
            extra={"user_id": str(user_id), "day": day.isoformat()},
        )
        return totals

    def create_template(  # noqa: PLR0913
        self,
        user_id: UUID,
        name: str,
        calories: float,
        default_amount: float,
        default_unit: str,
        category: TemplateCategory,
        protein_g: float = 0.0,
        carbs_g: float = 0.0,
        fats_g: float = 0.0,
    ) -> FoodTemplate:
        """Save a reusable food preset."""
        payload: dict[str, object] = {
            "name": require_text("name", name),
            "calories": require_number("calories", calories),
            "protein_g": require_number("protein_g", protein_g),
            "carbs_g": require_number("carbs_g", carbs_g),
            "fats_g": require_number("fats_g", fats_g),
            "default_amount": require_number(
                "default_amount", default_amount, strictly_positive=True
            ),
            "default_unit": require_text("default_unit", default_unit),
            "category": require_choice("category", category, TEMPLATE_CATEGORIES),
        }
        return self.template_repository.create_template(user_id, payload)

    def list_templates(self, user_id: UUID) -> list[FoodTemplate]:
        """Return templates ranked by usage count, then most recent use."""
        return self._rank(self.template_repository.list_templates(user_id))

    def record_template_use(self, user_id: UUID, template_id: UUID) -> None:
        """Record that one of the user's templates has been used."""
        self._require_own_template(user_id, template_id)
        self.template_repository.increment_usage(template_id, used_at=self.clock())

    def delete_template(self, user_id: UUID, template_id: UUID) -> None:
        """Delete one of the user's templates."""
        self._require_own_template(user_id, template_id)
        self.template_repository.delete_template(template_id)

    def log_template(
        self,
        user_id: UUID,
        day: date,
        template_id: UUID,
        meal_type: MealType,
        amount: float | None = None,
    ) -> FoodEntry:
        """Log a template as a food entry, scaled to ``amount``."""
        template = self._require_own_template(user_id, template_id)
        portion = require_optional_number("amount", amount, strictly_positive=True)
        portion = portion or template.default_amount
        factor = portion / template.default_amount
        entry = self.add_food_entry(
            user_id,
            day,
            FoodEntryCreate(
                name=template.name,
                calories=template.calories * factor,
                protein_g=template.protein_g * factor,
                carbs_g=template.carbs_g * factor,
                fats_g=template.fats_g * factor,
                amount=portion,
                unit=template.default_unit,
                meal_type=meal_type,
            ),
        )
        self.template_repository.increment_usage(template_id, used_at=self.clock())
        return entry

    def _require_own_entry(self, user_id: UUID, entry_id: UUID) -> FoodEntry:
        # Another user's entry is reported as missing.
        entry = self.repository.get_food_entry(entry_id)
        if entry is None or entry.user_id != user_id:
            raise EntityNotFoundError("food_entry", entry_id)
        return entry

    def _require_own_template(self, user_id: UUID, template_id: UUID) -> FoodTemplate:
        template = self.template_repository.get_template(template_id)
        if template is None or template.user_id != user_id:
            raise EntityNotFoundError("food_template", template_id)
        return template

    @staticmethod
    def _rank(templates: list[FoodTemplate]) -> list[FoodTemplate]:
        """Rank templates by usage count then most recent use."""
        return sorted(
            templates,
            key=lambda item: (
                item.usage_count,
                item.last_used or datetime.min.replace(tzinfo=UTC),
            ),
            reverse=True,
        )


def sum_food_entries(entries: list[FoodEntry]) -> NutritionTotals:
    """Sum calories and macros over food entries."""
    total = NutritionTotals(0.0, 0.0, 0.0, 0.0)
    for entry in entries:
        total = NutritionTotals(
            calories=total.calories + entry.calories,
            protein_g=total.protein_g + entry.protein_g,
            carbs_g=total.carbs_g + entry.carbs_g,
            fats_g=total.fats_g + entry.fats_g,
        )
    return total


def timestamp_for_day(day: date, now: datetime) -> datetime:
    """Return ``now`` when logging for today, else noon UTC on ``day``."""
    if now.date() == day:
        return now
    return datetime.combine(day, time(hour=12), tzinfo=UTC)


def _validate_create(data: FoodEntryCreate) -> dict[str, object]:
    return {
        "name": require_text("name", data.name),
        "calories": require_number("calories", data.calories),
        "protein_g": require_number("protein_g", data.protein_g),
        "carbs_g": require_number("carbs_g", data.carbs_g),
        "fats_g": require_number("fats_g", data.fats_g),
        "amount": require_number("amount", data.amount, strictly_positive=True),
        "unit": require_text("unit", data.unit),
        "meal_type": require_choice("meal_type", data.meal_type, MEAL_TYPES),
    }


def _validate_update(update: FoodEntryUpdate) -> dict[str, object]:
    payload = update.supplied()
    for name in ("calories", "protein_g", "carbs_g", "fats_g"):
        if name in payload:
            value = payload[name]
            payload[name] = require_number(name, value)  # type: ignore[arg-type]
    if "amount" in payload:
        payload["amount"] = require_number(
            "amount",
            payload["amount"],  # type: ignore[arg-type]
            strictly_positive=True,
        )
    if "name" in payload:
        payload["name"] = require_text("name", str(payload["name"]))
    if "unit" in payload:
        payload["unit"] = require_text("unit", str(payload["unit"]))
    if "meal_type" in payload:
        require_choice("meal_type", str(payload["meal_type"]), MEAL_TYPES)
    return payload
