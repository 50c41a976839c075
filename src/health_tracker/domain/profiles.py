"""Domain models for user profiles."""

from dataclasses import dataclass, fields
from datetime import datetime
from typing import Literal
from uuid import UUID

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal[
    "sedentary",
    "lightly_active",
    "moderately_active",
    "very_active",
    "extremely_active",
]
Units = Literal["metric", "imperial"]

GENDERS: frozenset[str] = frozenset({"male", "female", "other"})
ACTIVITY_LEVELS: frozenset[str] = frozenset(
    {
        "sedentary",
        "lightly_active",
        "moderately_active",
        "very_active",
        "extremely_active",
    }
)
UNITS: frozenset[str] = frozenset({"metric", "imperial"})


@dataclass(frozen=True)
class UserProfile:
    """Stored profile with derived energy targets."""

    user_id: UUID
    name: str
    email: str | None
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    bmr: int
    tdee: int
    calorie_target: int
    protein_target_g: int
    carbs_target_g: int
    fats_target_g: int
    units: Units = "metric"
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ProfileCreate:
    """User-entered values for a new profile."""

    name: str
    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel
    email: str | None = None
    calorie_target: int | None = None
    units: Units = "metric"


@dataclass(frozen=True)
class ProfileUpdate:
    """Partial profile update; ``None`` marks a field as not supplied."""

    name: str | None = None
    email: str | None = None
    age: int | None = None
    gender: Gender | None = None
    height_cm: float | None = None
    weight_kg: float | None = None
    activity_level: ActivityLevel | None = None
    calorie_target: int | None = None
    units: Units | None = None

    def supplied(self) -> dict[str, object]:
        """Return only the fields present in this update."""
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }

    def touches_energy_inputs(self) -> bool:
        """Return True when a BMR/TDEE input is part of the update."""
        return any(
            value is not None
            for value in (
                self.weight_kg,
                self.height_cm,
                self.age,
                self.gender,
                self.activity_level,
            )
        )
