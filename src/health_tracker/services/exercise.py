"""Exercise logging. Daily burned totals are summed on read, never stored."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from health_tracker.domain.daily import DailyEntry
from health_tracker.domain.exercise import (
    EXERCISE_CATEGORIES,
    INTENSITIES,
    ExerciseCreate,
    ExerciseEntry,
)
from health_tracker.errors import EntityNotFoundError
from health_tracker.services.daily import DailyEntryService
from health_tracker.services.food import timestamp_for_day
from health_tracker.services.metrics import estimate_exercise_calories
from health_tracker.services.profiles import ProfileRepository
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_optional_number,
    require_text,
)

MAX_MET_VALUE = 25


class ExerciseRepository(Protocol):
    """Persistence interface for exercise entries."""

    def create_exercise(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> ExerciseEntry:
        """Insert an exercise under a daily entry and return it."""

    def get_exercise(self, exercise_id: UUID) -> ExerciseEntry | None:
        """Return an exercise by id, if present."""

    def list_exercises(self, daily_entry_id: UUID) -> list[ExerciseEntry]:
        """Return a daily entry's exercises ordered by performed_at."""

    def list_exercises_since(self, user_id: UUID, start: date) -> list[ExerciseEntry]:
        """Return exercises logged on days from ``start`` onward."""

    def delete_exercise(self, exercise_id: UUID) -> None:
        """Delete an exercise."""


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class ExerciseService:
    """Application service for exercise entries."""

    daily_service: DailyEntryService
    repository: ExerciseRepository
    profile_repository: ProfileRepository
    clock: Callable[[], datetime] = field(default=_utcnow)

    def add_exercise(
        self, user_id: UUID, day: date, data: ExerciseCreate
    ) -> ExerciseEntry:
        """Log an exercise, estimating calories from MET when none are given."""
        duration = require_number("duration_minutes", data.duration_minutes)
        met_value = require_number("met_value", data.met_value, maximum=MAX_MET_VALUE)
        calories = require_optional_number("calories_burned", data.calories_burned)
        if calories is None:
            profile = self.profile_repository.get_profile(user_id)
            weight = profile.weight_kg if profile else 0.0
            calories = float(estimate_exercise_calories(met_value, weight, duration))
        performed_at = data.performed_at or timestamp_for_day(day, self.clock())
        payload: dict[str, object] = {
            "name": require_text("name", data.name),
            "category": require_choice("category", data.category, EXERCISE_CATEGORIES),
            "met_value": met_value,
            "duration_minutes": duration,
            "calories_burned": calories,
            "intensity": require_choice("intensity", data.intensity, INTENSITIES),
            "notes": data.notes,
            "performed_at": performed_at.isoformat(),
        }
        daily_entry = self.daily_service.get_or_create(user_id, day)
        return self.repository.create_exercise(daily_entry, payload)

    def list_for_day(self, user_id: UUID, day: date) -> list[ExerciseEntry]:
        """Return the day's exercises; empty when nothing was logged."""
        daily_entry = self.daily_service.get_entry(user_id, day)
        if daily_entry is None:
            return []
        return self.repository.list_exercises(daily_entry.id)

    def delete_exercise(self, user_id: UUID, exercise_id: UUID) -> None:
        """Delete one of the user's exercise entries."""
        exercise = self.repository.get_exercise(exercise_id)
        if exercise is None or exercise.user_id != user_id:
            raise EntityNotFoundError("exercise_entry", exercise_id)
        self.repository.delete_exercise(exercise_id)

    def daily_totals(self, user_id: UUID, day: date) -> float:
        """Return calories burned through exercise on a day."""
        return sum(entry.calories_burned for entry in self.list_for_day(user_id, day))
