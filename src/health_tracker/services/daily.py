"""Daily entry service: lazily created per-day rows and their summaries."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from health_tracker.domain.daily import (
    MIT_SLOTS,
    DailyEntry,
    DailyEntryUpdate,
    DailySummary,
    MitTask,
)
from health_tracker.errors import InvalidInputError
from health_tracker.services.metrics import calculate_calorie_balance, resolve_bmr
from health_tracker.services.validation import require_number

MAX_WEIGHT_KG = 700


class DailyEntryRepository(Protocol):
    """Persistence interface for daily entries."""

    def get_entry(self, user_id: UUID, day: date) -> DailyEntry | None:
        """Return the entry for a user and date, if present."""

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        """Return an entry by id, if present."""

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        """Insert an entry and return it."""

    def update_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        """Apply a partial update to an entry and return it."""

    def list_entries(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        *,
        descending: bool = False,
    ) -> list[DailyEntry]:
        """Return entries within an inclusive date range ordered by date."""


@dataclass
class DailyEntryService:
    """Application service for daily entries."""

    repository: DailyEntryRepository

    def get_entry(self, user_id: UUID, day: date) -> DailyEntry | None:
        """Return the entry for a day, or None when nothing was logged."""
        return self.repository.get_entry(user_id, day)

    def get_or_create(self, user_id: UUID, day: date) -> DailyEntry:
        """Return the entry for a day, creating a zeroed one when absent."""
        existing = self.repository.get_entry(user_id, day)
        if existing:
            return existing
        return self.repository.create_entry(user_id, day, {})

    def upsert(
        self, user_id: UUID, day: date, update: DailyEntryUpdate
    ) -> DailyEntry:
        """Apply an update to the day's entry, creating it when absent."""
        payload = update.supplied()
        existing = self.repository.get_entry(user_id, day)
        if existing is None:
            return self.repository.create_entry(user_id, day, payload)
        if not payload:
            return existing
        return self.repository.update_entry(user_id, day, payload)

    def list_entries(
        self, user_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[DailyEntry]:
        """Return entries in a date range, newest first."""
        return self.repository.list_entries(user_id, start, end, descending=True)

    def list_recent(
        self, user_id: UUID, days: int = 7, today: date | None = None
    ) -> list[DailyEntry]:
        """Return entries for the last ``days`` calendar days including today."""
        if days < 1:
            raise InvalidInputError("days", "must be at least 1")
        end = today or date.today()
        start = end - timedelta(days=days - 1)
        return self.list_entries(user_id, start, end)

    def update_weight(self, user_id: UUID, day: date, weight_kg: float) -> DailyEntry:
        """Record the day's weight."""
        weight = require_number(
            "weight_kg", weight_kg, maximum=MAX_WEIGHT_KG, strictly_positive=True
        )
        return self.upsert(user_id, day, DailyEntryUpdate(weight_kg=weight))

    def update_mit_tasks(
        self, user_id: UUID, day: date, tasks: dict[int, MitTask]
    ) -> DailyEntry:
        """Set MIT slots by number (1-3); unspecified slots are untouched."""
        changes: dict[str, object] = {}
        for slot, task in tasks.items():
            if slot not in MIT_SLOTS:
                raise InvalidInputError("mit_slot", "must be 1, 2 or 3")
            changes[f"mit_task_{slot}"] = task.description or ""
            changes[f"mit_task_{slot}_completed"] = task.completed
        return self.upsert(user_id, day, DailyEntryUpdate(**changes))

    def toggle_deep_work(self, user_id: UUID, day: date) -> DailyEntry:
        """Flip the deep work flag; a day without an entry becomes True."""
        existing = self.repository.get_entry(user_id, day)
        completed = not existing.deep_work_completed if existing else True
        return self.upsert(
            user_id, day, DailyEntryUpdate(deep_work_completed=completed)
        )

    def update_notes(self, user_id: UUID, day: date, notes: str) -> DailyEntry:
        """Replace the day's free-text notes."""
        return self.upsert(user_id, day, DailyEntryUpdate(notes=notes))

    @staticmethod
    def summarize(
        entry: DailyEntry, exercise_calories: float, profile_bmr: float | None
    ) -> DailySummary:
        """Derive the day's balance; BMR is the stored value else the profile's."""
        bmr = resolve_bmr(entry.calories_burned_bmr, profile_bmr)
        consumed = entry.calories_consumed
        return DailySummary(
            date=entry.date,
            calories_consumed=consumed,
            calories_burned_exercise=exercise_calories,
            bmr_calories=bmr,
            calorie_balance=calculate_calorie_balance(
                consumed, bmr, exercise_calories
            ),
            net_calories=consumed - exercise_calories,
            protein_g=entry.protein_consumed_g,
            carbs_g=entry.carbs_consumed_g,
            fats_g=entry.fats_consumed_g,
            mit_completed=entry.mit_completed,
            deep_work_completed=entry.deep_work_completed,
            has_weight=entry.weight_kg is not None,
        )


def week_start(day: date) -> date:
    """Return the Monday of ``day``'s week."""
    return day - timedelta(days=day.weekday())
