"""Domain models for exercise logging."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from uuid import UUID

ExerciseCategory = Literal["cardio", "strength", "sports", "daily_activities"]
Intensity = Literal["low", "moderate", "high"]

EXERCISE_CATEGORIES: frozenset[str] = frozenset(
    {"cardio", "strength", "sports", "daily_activities"}
)
INTENSITIES: frozenset[str] = frozenset({"low", "moderate", "high"})


@dataclass(frozen=True)
class ExerciseEntry:
    """An exercise performed on a day."""

    id: UUID
    user_id: UUID
    daily_entry_id: UUID
    entry_date: date
    name: str
    category: ExerciseCategory
    met_value: float
    duration_minutes: float
    calories_burned: float
    intensity: Intensity
    performed_at: datetime
    notes: str | None = None


@dataclass(frozen=True)
class ExerciseCreate:
    """Input for a new exercise entry."""

    name: str
    category: ExerciseCategory
    duration_minutes: float
    met_value: float = 5.0
    intensity: Intensity = "moderate"
    calories_burned: float | None = None
    performed_at: datetime | None = None
    notes: str | None = None
