"""Progress milestones and weekly objectives."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol
from uuid import UUID

from health_tracker.domain.goals import (
    MILESTONE_CATEGORIES,
    MilestoneCategory,
    ProgressMilestone,
    WeeklyEntry,
    WeeklyObjective,
)
from health_tracker.errors import EntityNotFoundError, InvalidInputError
from health_tracker.services.daily import week_start
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_text,
)

OBJECTIVE_SLOTS = (1, 2, 3)


class GoalsRepository(Protocol):
    """Persistence interface for milestones and weekly entries."""

    def create_milestone(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        """Insert a milestone and return it."""

    def get_milestone(self, milestone_id: UUID) -> ProgressMilestone | None:
        """Return a milestone by id, if present."""

    def update_milestone(
        self, milestone_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        """Apply a partial update and return the milestone."""

    def list_milestones(self, user_id: UUID) -> list[ProgressMilestone]:
        """Return a user's milestones, newest first."""

    def get_weekly_entry(self, user_id: UUID, start: date) -> WeeklyEntry | None:
        """Return the weekly entry starting on ``start``, if present."""

    def save_weekly_entry(
        self, user_id: UUID, start: date, payload: dict[str, object]
    ) -> WeeklyEntry:
        """Insert or update the weekly entry starting on ``start``."""

    def list_weekly_entries(self, user_id: UUID, start: date) -> list[WeeklyEntry]:
        """Return weekly entries starting on or after ``start``, oldest first."""


@dataclass
class GoalsService:
    """Application service for milestones and weekly reviews."""

    repository: GoalsRepository
    today: Callable[[], date] = field(default=date.today)

    def create_milestone(
        self,
        user_id: UUID,
        name: str,
        category: MilestoneCategory,
        description: str,
        target_date: date | None = None,
    ) -> ProgressMilestone:
        """Create an open milestone."""
        payload: dict[str, object] = {
            "name": require_text("name", name),
            "category": require_choice("category", category, MILESTONE_CATEGORIES),
            "description": description,
            "target_date": target_date.isoformat() if target_date else None,
            "is_completed": False,
            "progress_percentage": 0,
        }
        return self.repository.create_milestone(user_id, payload)

    def update_milestone_progress(
        self, user_id: UUID, milestone_id: UUID, progress_percentage: float
    ) -> ProgressMilestone:
        """Set a milestone's progress (0-100)."""
        progress = require_number(
            "progress_percentage", progress_percentage, maximum=100
        )
        self._require_milestone(user_id, milestone_id)
        return self.repository.update_milestone(
            milestone_id, {"progress_percentage": progress}
        )

    def complete_milestone(
        self, user_id: UUID, milestone_id: UUID
    ) -> ProgressMilestone:
        """Mark a milestone as completed today."""
        self._require_milestone(user_id, milestone_id)
        return self.repository.update_milestone(
            milestone_id,
            {
                "is_completed": True,
                "completed_date": self.today().isoformat(),
                "progress_percentage": 100,
            },
        )

    def list_milestones(self, user_id: UUID) -> list[ProgressMilestone]:
        """Return the user's milestones, newest first."""
        return self.repository.list_milestones(user_id)

    def upsert_weekly_entry(
        self,
        user_id: UUID,
        day: date,
        objectives: dict[int, WeeklyObjective],
        insights: str | None = None,
        next_week_focus: str | None = None,
    ) -> WeeklyEntry:
        """Save objectives for the week containing ``day``."""
        start = week_start(day)
        existing = self.repository.get_weekly_entry(user_id, start)
        slots = list(existing.objectives) if existing else [WeeklyObjective()] * 3
        for slot, objective in objectives.items():
            if slot not in OBJECTIVE_SLOTS:
                raise InvalidInputError("objective_slot", "must be 1, 2 or 3")
            slots[slot - 1] = objective
        payload: dict[str, object] = {"completion_rate": completion_rate(slots)}
        for slot, objective in zip(OBJECTIVE_SLOTS, slots, strict=True):
            payload[f"objective_{slot}"] = objective.description
            payload[f"objective_{slot}_completed"] = objective.completed
        if insights is not None:
            payload["insights"] = insights
        if next_week_focus is not None:
            payload["next_week_focus"] = next_week_focus
        return self.repository.save_weekly_entry(user_id, start, payload)

    def list_weekly_entries(self, user_id: UUID, start: date) -> list[WeeklyEntry]:
        """Return weekly entries from ``start`` onward."""
        return self.repository.list_weekly_entries(user_id, start)

    def _require_milestone(
        self, user_id: UUID, milestone_id: UUID
    ) -> ProgressMilestone:
        milestone = self.repository.get_milestone(milestone_id)
        if milestone is None or milestone.user_id != user_id:
            raise EntityNotFoundError("progress_milestone", milestone_id)
        return milestone


def completion_rate(objectives: list[WeeklyObjective]) -> float | None:
    """Return the percentage of set objectives that are completed."""
    set_objectives = [item for item in objectives if item.description]
    if not set_objectives:
        return None
    done = sum(1 for item in set_objectives if item.completed)
    return done / len(set_objectives) * 100
