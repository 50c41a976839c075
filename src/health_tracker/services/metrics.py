"""Energy and macro formulas.

Every function here is pure and total for finite inputs. Callers validate
input at the service boundary before calling in.
"""

import math
from dataclasses import dataclass

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "lightly_active": 1.375,
    "moderately_active": 1.55,
    "very_active": 1.725,
    "extremely_active": 1.9,
}
# Applied when the activity level is missing or not in the table.
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

GENDER_OFFSETS: dict[str, float] = {"male": 5.0, "female": -161.0}
# Midpoint of the male and female offsets.
NEUTRAL_GENDER_OFFSET = -78.0

PROTEIN_RATIO = 0.30
CARBS_RATIO = 0.40
FATS_RATIO = 0.30
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

DAYS_PER_WEEK = 7


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in grams."""

    protein_g: int
    carbs_g: int
    fats_g: int


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity."""
    return math.floor(value + 0.5)


def calculate_bmr(
    weight_kg: float, height_cm: float, age: float, gender: str | None
) -> int:
    """Return the Mifflin-St Jeor basal metabolic rate in kcal/day."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    offset = GENDER_OFFSETS.get(gender or "", NEUTRAL_GENDER_OFFSET)
    return round_half_up(base + offset)


def activity_multiplier(activity_level: str | None) -> float:
    """Return the TDEE multiplier for an activity level."""
    return ACTIVITY_MULTIPLIERS.get(activity_level or "", DEFAULT_ACTIVITY_MULTIPLIER)


def calculate_tdee(bmr: float, activity_level: str | None) -> int:
    """Return total daily energy expenditure for a BMR and activity level."""
    return round_half_up(bmr * activity_multiplier(activity_level))


def calculate_macro_targets(calories: float) -> MacroTargets:
    """Split a calorie target 30/40/30 into protein, carbs and fats grams."""
    return MacroTargets(
        protein_g=round_half_up(calories * PROTEIN_RATIO / KCAL_PER_G_PROTEIN),
        carbs_g=round_half_up(calories * CARBS_RATIO / KCAL_PER_G_CARBS),
        fats_g=round_half_up(calories * FATS_RATIO / KCAL_PER_G_FAT),
    )


def calculate_calorie_balance(
    consumed: float, bmr: float, burned_exercise: float
) -> float:
    """Return consumed minus expenditure; positive is a surplus."""
    return consumed - bmr - burned_exercise


def resolve_bmr(stored_bmr: float | None, profile_bmr: float | None) -> float:
    """Return the day's stored BMR, falling back to the profile BMR."""
    if stored_bmr:
        return stored_bmr
    return profile_bmr or 0


def dose_adherence(dose_mg: float, weekly_target_mg: float | None) -> float:
    """Return a 0-100 score of a dose against the prorated daily target.

    A compound without a positive weekly target scores 0.
    """
    if not weekly_target_mg or weekly_target_mg <= 0:
        return 0.0
    daily_target = weekly_target_mg / DAYS_PER_WEEK
    return min(dose_mg / daily_target, 1.0) * 100


def estimate_exercise_calories(
    met_value: float, weight_kg: float, duration_minutes: float
) -> int:
    """Estimate kcal burned from a MET value, body weight and duration."""
    return round_half_up(met_value * weight_kg * duration_minutes / 60)
