"""Profile, daily entry, food and exercise endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from health_tracker.api.auth import require_user
from health_tracker.api.models import (  # noqa: TC001
    ExerciseBody,
    FoodEntryBody,
    FoodEntryUpdateBody,
    MitTasksBody,
    NotesBody,
    ProfileCreateBody,
    ProfileUpdateBody,
    WeightBody,
)
from health_tracker.domain.daily import DailySummary, MitTask
from health_tracker.domain.exercise import ExerciseCreate
from health_tracker.domain.food import FoodEntryCreate, FoodEntryUpdate
from health_tracker.domain.profiles import ProfileCreate, ProfileUpdate
from health_tracker.services.metrics import calculate_calorie_balance

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["tracking"])


@router.get("/profile")
async def get_profile(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's profile, or null before setup."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    return {
        "profile": profile,
        "complete": container.profile_service.is_complete(user_id),
    }


@router.post("/profile", status_code=status.HTTP_201_CREATED)
async def create_profile(
    body: ProfileCreateBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Create the caller's profile with derived targets."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.create_profile(
        user_id, ProfileCreate(**body.model_dump())
    )
    return {"profile": profile}


@router.patch("/profile")
async def update_profile(
    body: ProfileUpdateBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Apply a partial profile update."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.update_profile(
        user_id, ProfileUpdate(**body.model_dump(exclude_none=True))
    )
    return {"profile": profile}


@router.get("/daily/{day}")
async def get_daily(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the day's entry and summary; zeros when nothing was logged."""
    container: AppContainer = request.app.state.container
    entry = container.daily_service.get_entry(user_id, day)
    exercise_calories = container.exercise_service.daily_totals(user_id, day)
    profile = container.profile_service.get_profile(user_id)
    profile_bmr = profile.bmr if profile else None
    if entry is None:
        summary = _empty_summary(day, exercise_calories, profile_bmr)
    else:
        summary = container.daily_service.summarize(
            entry, exercise_calories, profile_bmr
        )
    return {"entry": entry, "summary": summary}


@router.put("/daily/{day}/weight")
async def put_weight(
    day: date, body: WeightBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Record the day's weight."""
    container: AppContainer = request.app.state.container
    entry = container.daily_service.update_weight(user_id, day, body.weight_kg)
    return {"entry": entry}


@router.put("/daily/{day}/mits")
async def put_mits(
    day: date,
    body: MitTasksBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Set the day's MIT slots."""
    container: AppContainer = request.app.state.container
    tasks = {
        task.slot: MitTask(description=task.description, completed=task.completed)
        for task in body.tasks
    }
    entry = container.daily_service.update_mit_tasks(user_id, day, tasks)
    return {"entry": entry}


@router.put("/daily/{day}/notes")
async def put_notes(
    day: date, body: NotesBody, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Replace the day's free-form notes."""
    container: AppContainer = request.app.state.container
    entry = container.daily_service.update_notes(user_id, day, body.notes)
    return {"entry": entry}


@router.post("/daily/{day}/deep-work/toggle")
async def toggle_deep_work(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Flip the day's deep work flag."""
    container: AppContainer = request.app.state.container
    entry = container.daily_service.toggle_deep_work(user_id, day)
    return {"entry": entry}


@router.get("/daily/{day}/foods")
async def list_foods(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the day's food entries."""
    container: AppContainer = request.app.state.container
    return {"foods": container.food_service.list_for_day(user_id, day)}


@router.post("/daily/{day}/foods", status_code=status.HTTP_201_CREATED)
async def add_food(
    day: date,
    body: FoodEntryBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Log a food entry for the day."""
    container: AppContainer = request.app.state.container
    food = container.food_service.add_food_entry(
        user_id, day, FoodEntryCreate(**body.model_dump())
    )
    return {"food": food}


@router.patch("/foods/{entry_id}")
async def update_food(
    entry_id: UUID,
    body: FoodEntryUpdateBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Edit one of the caller's food entries."""
    container: AppContainer = request.app.state.container
    food = container.food_service.update_food_entry(
        user_id, entry_id, FoodEntryUpdate(**body.model_dump(exclude_none=True))
    )
    return {"food": food}


@router.delete("/foods/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_food(
    entry_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Delete one of the caller's food entries."""
    container: AppContainer = request.app.state.container
    container.food_service.delete_food_entry(user_id, entry_id)


@router.get("/daily/{day}/exercises")
async def list_exercises(
    day: date, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the day's exercises and their calorie total."""
    container: AppContainer = request.app.state.container
    exercises = container.exercise_service.list_for_day(user_id, day)
    return {
        "exercises": exercises,
        "total_calories": sum(item.calories_burned for item in exercises),
    }


@router.post("/daily/{day}/exercises", status_code=status.HTTP_201_CREATED)
async def add_exercise(
    day: date,
    body: ExerciseBody,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Log an exercise for the day."""
    container: AppContainer = request.app.state.container
    exercise = container.exercise_service.add_exercise(
        user_id, day, ExerciseCreate(**body.model_dump())
    )
    return {"exercise": exercise}


@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exercise(
    exercise_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> None:
    """Delete one of the caller's exercises."""
    container: AppContainer = request.app.state.container
    container.exercise_service.delete_exercise(user_id, exercise_id)


def _empty_summary(
    day: date, exercise_calories: float, profile_bmr: float | None
) -> DailySummary:
    bmr = float(profile_bmr or 0)
    return DailySummary(
        date=day,
        calories_consumed=0.0,
        calories_burned_exercise=exercise_calories,
        bmr_calories=bmr,
        calorie_balance=calculate_calorie_balance(0.0, bmr, exercise_calories),
        net_calories=-exercise_calories,
        protein_g=0.0,
        carbs_g=0.0,
        fats_g=0.0,
        mit_completed=0,
        deep_work_completed=False,
        has_weight=False,
    )
