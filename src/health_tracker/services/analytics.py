"""Trend series and dashboard summaries over trailing windows.

Every series is a stateless transform over a snapshot read. A window of N
days covers rows dated on or after ``today - N days``.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, timedelta
from uuid import UUID

from health_tracker.domain.analytics import (
    AnalyticsOverview,
    CaloriePoint,
    InjectionDay,
    MacroPoint,
    MitDay,
    NirvanaDay,
    WeightPoint,
    WorkoutDay,
)
from health_tracker.domain.goals import ProgressMilestone, WeeklyEntry
from health_tracker.errors import InvalidInputError
from health_tracker.services.daily import DailyEntryRepository
from health_tracker.services.exercise import ExerciseRepository
from health_tracker.services.goals import GoalsRepository
from health_tracker.services.injections import InjectionRepository
from health_tracker.services.metrics import (
    calculate_calorie_balance,
    dose_adherence,
    resolve_bmr,
)
from health_tracker.services.nirvana import NirvanaRepository
from health_tracker.services.profiles import ProfileRepository

MIT_TOTAL = 3
SHORT_WINDOW_DAYS = 7
# Extra history read for weight so the window boundary has a prior sample.
WEIGHT_LOOKBACK_DAYS = 30


@dataclass
class AnalyticsService:
    """Read-only analytics over a user's logs."""

    daily_repository: DailyEntryRepository
    exercise_repository: ExerciseRepository
    injection_repository: InjectionRepository
    nirvana_repository: NirvanaRepository
    goals_repository: GoalsRepository
    profile_repository: ProfileRepository
    today: Callable[[], date] = field(default=date.today)

    def weight_trend(self, user_id: UUID, days: int = 30) -> list[WeightPoint]:
        """Return recorded weights in the window, oldest first."""
        entries = self.daily_repository.list_entries(user_id, self._start(days))
        return [
            WeightPoint(date=entry.date, weight=entry.weight_kg)
            for entry in entries
            if entry.weight_kg is not None
        ]

    def calorie_balance(self, user_id: UUID, days: int = 30) -> list[CaloriePoint]:
        """Return per-day consumed, burned, BMR and balance, oldest first.

        Burned calories are summed from exercise entries; BMR is the day's
        stored value, else the current profile BMR.
        """
        start = self._start(days)
        entries = self.daily_repository.list_entries(user_id, start)
        burned_by_day: dict[date, float] = {}
        for exercise in self.exercise_repository.list_exercises_since(user_id, start):
            day = exercise.entry_date
            burned_by_day[day] = burned_by_day.get(day, 0.0) + exercise.calories_burned
        profile = self.profile_repository.get_profile(user_id)
        profile_bmr = profile.bmr if profile else None

        points = []
        for entry in entries:
            burned = burned_by_day.get(entry.date, 0.0)
            bmr = resolve_bmr(entry.calories_burned_bmr, profile_bmr)
            points.append(
                CaloriePoint(
                    date=entry.date,
                    consumed=entry.calories_consumed,
                    burned=burned,
                    balance=calculate_calorie_balance(
                        entry.calories_consumed, bmr, burned
                    ),
                    bmr=bmr,
                )
            )
        return points

    def macro_trend(self, user_id: UUID, days: int = 30) -> list[MacroPoint]:
        """Return per-day macros against the profile's current targets.

        Targets are not versioned, so every point carries today's targets.
        """
        entries = self.daily_repository.list_entries(user_id, self._start(days))
        profile = self.profile_repository.get_profile(user_id)
        protein_target = profile.protein_target_g if profile else 0
        carbs_target = profile.carbs_target_g if profile else 0
        fats_target = profile.fats_target_g if profile else 0
        return [
            MacroPoint(
                date=entry.date,
                protein=entry.protein_consumed_g,
                carbs=entry.carbs_consumed_g,
                fats=entry.fats_consumed_g,
                protein_target=protein_target,
                carbs_target=carbs_target,
                fats_target=fats_target,
            )
            for entry in entries
        ]

    def workout_summary(self, user_id: UUID, days: int = 30) -> list[WorkoutDay]:
        """Return exercise rollups grouped by the day they were logged on."""
        exercises = self.exercise_repository.list_exercises_since(
            user_id, self._start(days)
        )
        grouped: dict[date, WorkoutDay] = {}
        for exercise in exercises:
            day = exercise.entry_date
            current = grouped.get(day) or WorkoutDay(
                date=day,
                total_calories=0.0,
                duration=0.0,
                exercise_count=0,
                categories=[],
            )
            categories = current.categories
            if exercise.category not in categories:
                categories = [*categories, exercise.category]
            grouped[day] = WorkoutDay(
                date=day,
                total_calories=current.total_calories + exercise.calories_burned,
                duration=current.duration + exercise.duration_minutes,
                exercise_count=current.exercise_count + 1,
                categories=categories,
            )
        return [grouped[day] for day in sorted(grouped)]

    def injection_adherence(self, user_id: UUID, days: int = 30) -> list[InjectionDay]:
        """Return per-day dose totals and a 0-100 adherence score.

        The score averages each dose against its compound's weekly target
        divided by seven, capped at 100. A zero target scores 0.
        """
        injections = self.injection_repository.list_injections(
            user_id, self._start(days)
        )
        doses_by_day: dict[date, list[tuple[float, float]]] = {}
        compounds_by_day: dict[date, list[str]] = {}
        for injection in injections:
            day = injection.injection_date
            doses_by_day.setdefault(day, []).append(
                (injection.dose_mg, injection.compound_weekly_target_mg)
            )
            names = compounds_by_day.setdefault(day, [])
            if injection.compound_name and injection.compound_name not in names:
                names.append(injection.compound_name)

        results = []
        for day in sorted(doses_by_day):
            doses = doses_by_day[day]
            score = sum(dose_adherence(dose, target) for dose, target in doses)
            results.append(
                InjectionDay(
                    date=day,
                    total_dose=sum(dose for dose, _ in doses),
                    compounds=compounds_by_day[day],
                    adherence_score=score / len(doses),
                )
            )
        return results

    def nirvana_sessions(self, user_id: UUID, days: int = 30) -> list[NirvanaDay]:
        """Return logged sessions in the window, oldest first."""
        sessions = self.nirvana_repository.list_sessions(user_id, self._start(days))
        return [
            NirvanaDay(
                date=session.session_date,
                duration=session.duration_minutes,
                difficulty=session.difficulty,
                quality=session.quality_rating,
            )
            for session in sessions
        ]

    def mit_completion(self, user_id: UUID, days: int = 30) -> list[MitDay]:
        """Return per-day MIT completion and the deep work flag."""
        entries = self.daily_repository.list_entries(user_id, self._start(days))
        return [
            MitDay(
                date=entry.date,
                mit_completed=entry.mit_completed,
                mit_total=MIT_TOTAL,
                deep_work_completed=entry.deep_work_completed,
            )
            for entry in entries
        ]

    def active_milestones(self, user_id: UUID) -> list[ProgressMilestone]:
        """Return the user's milestones, newest first."""
        return self.goals_repository.list_milestones(user_id)

    def weekly_objectives(self, user_id: UUID, weeks: int = 8) -> list[WeeklyEntry]:
        """Return weekly entries for the trailing ``weeks`` weeks."""
        return self.goals_repository.list_weekly_entries(
            user_id, self._start(weeks * 7)
        )

    def overview(self, user_id: UUID, days: int = 30) -> AnalyticsOverview:
        """Return the dashboard summary for a window of ``days``."""
        today = self.today()
        start_7d = today - timedelta(days=SHORT_WINDOW_DAYS)
        start_window = self._start(days)

        weights = self.weight_trend(user_id, days + WEIGHT_LOOKBACK_DAYS)
        calories = self.calorie_balance(user_id, days)
        mits = self.mit_completion(user_id, days)
        workouts = self.workout_summary(user_id, days)
        injections = self.injection_adherence(user_id, days)
        sessions = self.nirvana_sessions(user_id, days)
        milestones = self.active_milestones(user_id)

        current_weight = weights[-1].weight if weights else None
        calories_7d = [point for point in calories if point.date >= start_7d]
        mits_7d = [point for point in mits if point.date >= start_7d]
        workouts_7d = [point for point in workouts if point.date >= start_7d]
        injections_7d = [point for point in injections if point.date >= start_7d]

        return AnalyticsOverview(
            days=days,
            current_weight=current_weight,
            weight_change_7d=weight_change(weights, start_7d),
            weight_change_window=weight_change(weights, start_window),
            avg_calorie_balance_7d=_mean([point.balance for point in calories_7d]),
            avg_calorie_balance_window=_mean([point.balance for point in calories]),
            mit_completion_rate_7d=mit_completion_rate(mits_7d),
            mit_completion_rate_window=mit_completion_rate(mits),
            deep_work_streak=deep_work_streak(mits),
            total_workouts_7d=sum(day.exercise_count for day in workouts_7d),
            total_workouts_window=sum(day.exercise_count for day in workouts),
            injection_adherence_7d=_mean(
                [day.adherence_score for day in injections_7d]
            )
            or 0.0,
            nirvana_sessions_7d=sum(
                1 for session in sessions if session.date >= start_7d
            ),
            active_milestones=sum(
                1 for milestone in milestones if not milestone.is_completed
            ),
        )

    def _start(self, days: int) -> date:
        if days < 1:
            raise InvalidInputError("days", "must be at least 1")
        return self.today() - timedelta(days=days)


def weight_change(weights: list[WeightPoint], boundary: date) -> float | None:
    """Return latest weight minus the latest sample on or before ``boundary``.

    ``weights`` must be ordered oldest first.
    """
    if not weights:
        return None
    baseline = None
    for point in weights:
        if point.date > boundary:
            break
        baseline = point
    if baseline is None:
        return None
    return weights[-1].weight - baseline.weight


def mit_completion_rate(days: list[MitDay]) -> float:
    """Return mean MIT completion as a percentage, 0 when there is no data."""
    if not days:
        return 0.0
    return sum(day.mit_completed / day.mit_total for day in days) / len(days) * 100


def deep_work_streak(days: list[MitDay]) -> int:
    """Count consecutive deep work days back from the newest entry.

    Only logged entries are scanned, so a missing date does not end a streak.
    """
    streak = 0
    for day in reversed(days):
        if not day.deep_work_completed:
            break
        streak += 1
    return streak


def _mean(values: list[float]) -> float | None:
    if not values:
        return None
    return sum(values) / len(values)
