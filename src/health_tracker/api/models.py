"""Pydantic models for request bodies."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field


class ProfileCreateBody(BaseModel):
    """Profile setup payload."""

    name: str
    age: int
    gender: str
    height_cm: float
    weight_kg: float
    activity_level: str
    email: str | None = None
    calorie_target: int | None = None
    units: str = "metric"


class ProfileUpdateBody(BaseModel):
    """Partial profile update payload."""

    name: str | None = None
    email: str | None = None
    age: int | None = None
    gender: str | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: str | None = None
    calorie_target: int | None = None
    units: str | None = None


class WeightBody(BaseModel):
    """Daily weight payload."""

    weight_kg: float


class MitTaskBody(BaseModel):
    """One MIT slot."""

    slot: int
    description: str | None = None
    completed: bool = False


class MitTasksBody(BaseModel):
    """MIT slots to set for a day."""

    tasks: list[MitTaskBody] = Field(default_factory=list)


class FoodEntryBody(BaseModel):
    """New food entry payload."""

    name: str
    calories: float
    amount: float
    unit: str
    meal_type: str
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0
    consumed_at: datetime | None = None


class FoodEntryUpdateBody(BaseModel):
    """Partial food entry update payload."""

    name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fats_g: float | None = None
    amount: float | None = None
    unit: str | None = None
    meal_type: str | None = None


class ExerciseBody(BaseModel):
    """New exercise entry payload."""

    name: str
    category: str
    duration_minutes: float
    met_value: float = 5.0
    intensity: str = "moderate"
    calories_burned: float | None = None
    performed_at: datetime | None = None
    notes: str | None = None


class NotesBody(BaseModel):
    """Daily notes payload."""

    notes: str


class TemplateBody(BaseModel):
    """New food template payload."""

    name: str
    calories: float
    default_amount: float
    default_unit: str
    category: str
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fats_g: float = 0.0


class TemplateLogBody(BaseModel):
    """Log a template as a food entry."""

    day: date
    meal_type: str
    amount: float | None = None


class CompoundBody(BaseModel):
    """New injectable compound payload."""

    name: str
    concentration: float
    ester_type: str
    half_life_days: float
    category: str
    weekly_target_mg: float
    notes: str | None = None


class CompoundUpdateBody(BaseModel):
    """Partial compound update payload."""

    name: str | None = None
    concentration: float | None = None
    ester_type: str | None = None
    half_life_days: float | None = None
    category: str | None = None
    weekly_target_mg: float | None = None
    notes: str | None = None


class InjectionBody(BaseModel):
    """New injection payload."""

    compound_id: UUID
    dose_mg: float
    volume_ml: float
    injection_site: str
    injection_date: date
    notes: str | None = None


class NirvanaSessionBody(BaseModel):
    """New Nirvana session payload."""

    session_date: date
    session_type: str
    duration_minutes: float
    difficulty: str
    quality_rating: int
    exercises: list[str] = Field(default_factory=list)
    body_parts: list[str] = Field(default_factory=list)
    notes: str | None = None


class MilestoneBody(BaseModel):
    """New milestone payload."""

    name: str
    category: str
    description: str
    target_date: date | None = None


class MilestoneProgressBody(BaseModel):
    """Milestone progress payload."""

    progress_percentage: float


class WeeklyObjectiveBody(BaseModel):
    """One weekly objective slot."""

    slot: int
    description: str | None = None
    completed: bool = False


class WeeklyEntryBody(BaseModel):
    """Objectives and review notes for a week."""

    objectives: list[WeeklyObjectiveBody] = Field(default_factory=list)
    insights: str | None = None
    next_week_focus: str | None = None
