"""Domain models for milestones and weekly reviews."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Literal
from uuid import UUID

MilestoneCategory = Literal["strength", "skill", "flexibility", "endurance"]

MILESTONE_CATEGORIES: frozenset[str] = frozenset(
    {"strength", "skill", "flexibility", "endurance"}
)


@dataclass(frozen=True)
class ProgressMilestone:
    """A long-running goal."""

    id: UUID
    user_id: UUID
    name: str
    category: MilestoneCategory
    description: str
    target_date: date | None
    completed_date: date | None
    is_completed: bool
    progress_percentage: float
    notes: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class WeeklyObjective:
    """One weekly objective slot."""

    description: str | None = None
    completed: bool = False


@dataclass(frozen=True)
class WeeklyEntry:
    """Weekly objectives and review notes."""

    id: UUID
    user_id: UUID
    week_start_date: date
    objectives: tuple[WeeklyObjective, WeeklyObjective, WeeklyObjective]
    completion_rate: float | None
    insights: str | None = None
    next_week_focus: str | None = None
    review_date: date | None = None
