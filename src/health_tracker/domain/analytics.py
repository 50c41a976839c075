"""Domain models for analytics series."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeightPoint:
    """Recorded weight on a date."""

    date: date
    weight: float


@dataclass(frozen=True)
class CaloriePoint:
    """Energy balance for a date."""

    date: date
    consumed: float
    burned: float
    balance: float
    bmr: float


@dataclass(frozen=True)
class MacroPoint:
    """Macros eaten on a date against the current targets."""

    date: date
    protein: float
    carbs: float
    fats: float
    protein_target: int
    carbs_target: int
    fats_target: int


@dataclass(frozen=True)
class WorkoutDay:
    """Exercise rollup for a date."""

    date: date
    total_calories: float
    duration: float
    exercise_count: int
    categories: list[str]


@dataclass(frozen=True)
class InjectionDay:
    """Injection rollup for a date."""

    date: date
    total_dose: float
    compounds: list[str]
    adherence_score: float


@dataclass(frozen=True)
class NirvanaDay:
    """Session summary for a date."""

    date: date
    duration: float
    difficulty: str
    quality: int


@dataclass(frozen=True)
class MitDay:
    """MIT completion for a date."""

    date: date
    mit_completed: int
    mit_total: int
    deep_work_completed: bool


@dataclass(frozen=True)
class AnalyticsOverview:
    """Dashboard summary over a trailing window."""

    days: int
    current_weight: float | None
    weight_change_7d: float | None
    weight_change_window: float | None
    avg_calorie_balance_7d: float | None
    avg_calorie_balance_window: float | None
    mit_completion_rate_7d: float
    mit_completion_rate_window: float
    deep_work_streak: int
    total_workouts_7d: int
    total_workouts_window: int
    injection_adherence_7d: float
    nirvana_sessions_7d: int
    active_milestones: int
