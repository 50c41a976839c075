"""Profile lifecycle and the BMR/TDEE recalculation policy."""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar
from uuid import UUID

from health_tracker.domain.profiles import (
    ACTIVITY_LEVELS,
    GENDERS,
    UNITS,
    ProfileCreate,
    ProfileUpdate,
    UserProfile,
)
from health_tracker.errors import EntityNotFoundError
from health_tracker.services.metrics import (
    calculate_bmr,
    calculate_macro_targets,
    calculate_tdee,
)
from health_tracker.services.validation import (
    require_choice,
    require_number,
    require_optional_number,
    require_text,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MAX_AGE = 130
MAX_HEIGHT_CM = 300
MAX_WEIGHT_KG = 700


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def create_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        """Insert a profile row and return it."""

    def update_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        """Apply a partial update and return the stored profile."""

    def delete_profile(self, user_id: UUID) -> None:
        """Delete the profile for a user."""


@dataclass
class ProfileService:
    """Application service for profiles and their derived targets."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile or None."""
        return self.repository.get_profile(user_id)

    def create_profile(self, user_id: UUID, data: ProfileCreate) -> UserProfile:
        """Create a profile with BMR, TDEE and macro targets filled in."""
        _validate_create(data)
        bmr = calculate_bmr(data.weight_kg, data.height_cm, data.age, data.gender)
        tdee = calculate_tdee(bmr, data.activity_level)
        calorie_target = data.calorie_target or tdee
        macros = calculate_macro_targets(calorie_target)
        payload: dict[str, object] = {
            "name": require_text("name", data.name),
            "email": data.email,
            "age": data.age,
            "gender": data.gender,
            "height_cm": data.height_cm,
            "weight_kg": data.weight_kg,
            "activity_level": data.activity_level,
            "bmr": bmr,
            "tdee": tdee,
            "calorie_target": calorie_target,
            "protein_target_g": macros.protein_g,
            "carbs_target_g": macros.carbs_g,
            "fats_target_g": macros.fats_g,
            "units": data.units,
        }
        return self.repository.create_profile(user_id, payload)

    def update_profile(self, user_id: UUID, update: ProfileUpdate) -> UserProfile:
        """Persist an update, recalculating energy targets when inputs change.

        When calorie_target is supplied alongside a changed input, the stored
        macro targets are left as they are.
        """
        _validate_update(update)
        current = self.repository.get_profile(user_id)
        if current is None:
            raise EntityNotFoundError("profile", user_id)
        payload = build_profile_changes(current, update)
        return self.repository.update_profile(user_id, payload)

    def delete_profile(self, user_id: UUID) -> None:
        """Delete the user's profile."""
        self.repository.delete_profile(user_id)

    def is_complete(self, user_id: UUID) -> bool:
        """Return True when the profile has the fields the formulas need."""
        profile = self.repository.get_profile(user_id)
        if profile is None:
            return False
        return bool(
            profile.bmr > 0
            and profile.height_cm > 0
            and profile.weight_kg > 0
            and profile.gender
        )


def build_profile_changes(
    current: UserProfile, update: ProfileUpdate
) -> dict[str, object]:
    """Return the column changes for ``update`` applied over ``current``."""
    changes = update.supplied()
    if not update.touches_energy_inputs():
        return changes

    weight = _pick(update.weight_kg, current.weight_kg)
    height = _pick(update.height_cm, current.height_cm)
    age = _pick(update.age, current.age)
    gender = _pick(update.gender, current.gender)
    activity_level = _pick(update.activity_level, current.activity_level)

    bmr = calculate_bmr(weight, height, age, gender)
    tdee = calculate_tdee(bmr, activity_level)
    changes["bmr"] = bmr
    changes["tdee"] = tdee

    if update.calorie_target is None:
        macros = calculate_macro_targets(tdee)
        changes["calorie_target"] = tdee
        changes["protein_target_g"] = macros.protein_g
        changes["carbs_target_g"] = macros.carbs_g
        changes["fats_target_g"] = macros.fats_g
    logger.info(
        "Recalculated energy targets",
        extra={"user_id": str(current.user_id), "bmr": bmr, "tdee": tdee},
    )
    return changes


def _pick(value: T | None, fallback: T) -> T:
    return fallback if value is None else value


def _validate_create(data: ProfileCreate) -> None:
    require_number("age", data.age, maximum=MAX_AGE, strictly_positive=True)
    require_number(
        "height_cm", data.height_cm, maximum=MAX_HEIGHT_CM, strictly_positive=True
    )
    require_number(
        "weight_kg", data.weight_kg, maximum=MAX_WEIGHT_KG, strictly_positive=True
    )
    require_choice("gender", data.gender, GENDERS)
    require_choice("activity_level", data.activity_level, ACTIVITY_LEVELS)
    require_choice("units", data.units, UNITS)
    require_optional_number(
        "calorie_target", data.calorie_target, strictly_positive=True
    )


def _validate_update(update: ProfileUpdate) -> None:
    require_optional_number(
        "age", update.age, maximum=MAX_AGE, strictly_positive=True
    )
    require_optional_number(
        "height_cm", update.height_cm, maximum=MAX_HEIGHT_CM, strictly_positive=True
    )
    require_optional_number(
        "weight_kg", update.weight_kg, maximum=MAX_WEIGHT_KG, strictly_positive=True
    )
    require_optional_number(
        "calorie_target", update.calorie_target, strictly_positive=True
    )
    if update.name is not None:
        require_text("name", update.name)
    if update.gender is not None:
        require_choice("gender", update.gender, GENDERS)
    if update.activity_level is not None:
        require_choice("activity_level", update.activity_level, ACTIVITY_LEVELS)
    if update.units is not None:
        require_choice("units", update.units, UNITS)
