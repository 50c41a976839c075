"""Domain models for food logging and templates."""

from dataclasses import dataclass, fields
from datetime import date, datetime
from typing import Literal
from uuid import UUID

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
TemplateCategory = Literal["meal", "snack", "drink"]

MEAL_TYPES: frozenset[str] = frozenset({"breakfast", "lunch", "dinner", "snack"})
TEMPLATE_CATEGORIES: frozenset[str] = frozenset({"meal", "snack", "drink"})


@dataclass(frozen=True)
class FoodEntry:
    """A food item logged against a daily entry."""

    id: UUID
    user_id: UUID
    daily_entry_id: UUID
    entry_date: date
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    amount: float
    unit: str
    meal_type: MealType
    consumed_at: datetime


@dataclass(frozen=True)
class FoodEntryCreate:
    """Input for a new food entry."""

    name: str
    calories: float
    amount: float
    unit: str
    meal_type: MealType
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0
    consumed_at: datetime | None = None


@dataclass(frozen=True)
class FoodEntryUpdate:
    """Partial food entry update; ``None`` marks a field as not supplied."""

    name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fats_g: float | None = None
    amount: float | None = None
    unit: str | None = None
    meal_type: MealType | None = None

    def supplied(self) -> dict[str, object]:
        """Return only the fields present in this update."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


@dataclass(frozen=True)
class FoodTemplate:
    """Reusable food preset ranked by usage."""

    id: UUID
    user_id: UUID
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    default_amount: float
    default_unit: str
    category: TemplateCategory
    is_favorite: bool
    usage_count: int
    last_used: datetime | None
