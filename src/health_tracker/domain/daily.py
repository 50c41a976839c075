"""Domain models for daily entries."""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from uuid import UUID

MIT_SLOTS = (1, 2, 3)


@dataclass(frozen=True)
class MitTask:
    """One "Most Important Task" slot."""

    description: str | None = None
    completed: bool = False


@dataclass(frozen=True)
class DailyEntry:
    """Aggregation root for a single calendar day."""

    id: UUID
    user_id: UUID
    date: date
    weight_kg: float | None = None
    calories_consumed: float = 0.0
    calories_burned_exercise: float = 0.0
    calories_burned_bmr: float = 0.0
    protein_consumed_g: float = 0.0
    carbs_consumed_g: float = 0.0
    fats_consumed_g: float = 0.0
    mit_tasks: tuple[MitTask, MitTask, MitTask] = field(
        default_factory=lambda: (MitTask(), MitTask(), MitTask())
    )
    deep_work_completed: bool = False
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def mit_completed(self) -> int:
        """Number of completed MIT slots."""
        return sum(1 for task in self.mit_tasks if task.completed)


@dataclass(frozen=True)
class DailyEntryUpdate:
    """Partial daily entry update; ``None`` marks a field as not supplied."""

    weight_kg: float | None = None
    calories_consumed: float | None = None
    calories_burned_bmr: float | None = None
    protein_consumed_g: float | None = None
    carbs_consumed_g: float | None = None
    fats_consumed_g: float | None = None
    mit_task_1: str | None = None
    mit_task_1_completed: bool | None = None
    mit_task_2: str | None = None
    mit_task_2_completed: bool | None = None
    mit_task_3: str | None = None
    mit_task_3_completed: bool | None = None
    deep_work_completed: bool | None = None
    notes: str | None = None

    def supplied(self) -> dict[str, object]:
        """Return only the fields present in this update."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


@dataclass(frozen=True)
class NutritionTotals:
    """Summed nutrition for a day."""

    calories: float
    protein_g: float
    carbs_g: float
    fats_g: float


@dataclass(frozen=True)
class DailySummary:
    """Derived metrics for one day."""

    date: date
    calories_consumed: float
    calories_burned_exercise: float
    bmr_calories: float
    calorie_balance: float
    net_calories: float
    protein_g: float
    carbs_g: float
    fats_g: float
    mit_completed: int
    deep_work_completed: bool
    has_weight: bool
