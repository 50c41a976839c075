"""Tests for trend series and the dashboard overview."""

from datetime import UTC, date, datetime, timedelta
from uuid import UUID

import pytest

from health_tracker.domain.analytics import MitDay, WeightPoint
from health_tracker.domain.exercise import ExerciseCreate
from health_tracker.domain.profiles import ProfileCreate
from health_tracker.errors import InvalidInputError
from health_tracker.services.analytics import (
    AnalyticsService,
    deep_work_streak,
    mit_completion_rate,
    weight_change,
)
from tests.conftest import TODAY, InMemoryDailyEntryRepository


def _day(offset: int) -> date:
    return TODAY - timedelta(days=offset)


def _mit_days(flags: list[bool]) -> list[MitDay]:
    return [
        MitDay(
            date=_day(len(flags) - index),
            mit_completed=0,
            mit_total=3,
            deep_work_completed=flag,
        )
        for index, flag in enumerate(flags)
    ]


def _log(
    repository: InMemoryDailyEntryRepository,
    user_id: UUID,
    offset: int,
    **payload: object,
) -> None:
    repository.create_entry(user_id, _day(offset), payload)


def test_weight_trend_skips_days_without_weight(
    analytics_service: AnalyticsService, daily_repository, user_id
) -> None:
    _log(daily_repository, user_id, 3, weight_kg=81.0)
    _log(daily_repository, user_id, 2, notes="no scale")
    _log(daily_repository, user_id, 1, weight_kg=80.5)
    _log(daily_repository, user_id, 45, weight_kg=84.0)

    points = analytics_service.weight_trend(user_id, 30)

    assert points == [
        WeightPoint(date=_day(3), weight=81.0),
        WeightPoint(date=_day(1), weight=80.5),
    ]


def test_days_must_be_positive(analytics_service: AnalyticsService, user_id) -> None:
    with pytest.raises(InvalidInputError):
        analytics_service.weight_trend(user_id, 0)


def test_calorie_balance_sums_exercise_on_read(
    analytics_service: AnalyticsService,
    daily_repository,
    profile_service,
    exercise_service,
    user_id,
) -> None:
    profile_service.create_profile(
        user_id,
        ProfileCreate(
            name="Alex",
            age=30,
            gender="male",
            height_cm=180,
            weight_kg=80,
            activity_level="moderately_active",
        ),
    )
    _log(daily_repository, user_id, 1, calories_consumed=2000.0)
    _log(
        daily_repository,
        user_id,
        2,
        calories_consumed=2500.0,
        calories_burned_bmr=1700.0,
    )
    exercise_service.add_exercise(
        user_id,
        _day(1),
        ExerciseCreate(
            name="Run", category="cardio", duration_minutes=30, calories_burned=300
        ),
    )

    points = analytics_service.calorie_balance(user_id, 7)

    assert [point.date for point in points] == [_day(2), _day(1)]
    assert points[0].bmr == 1700
    assert points[0].balance == 800
    assert points[1].bmr == 1780
    assert points[1].burned == 300
    assert points[1].balance == -80


def test_macro_trend_targets_default_to_zero(
    analytics_service: AnalyticsService, daily_repository, user_id
) -> None:
    _log(daily_repository, user_id, 1, protein_consumed_g=120.0)

    points = analytics_service.macro_trend(user_id, 7)

    assert points[0].protein == 120.0
    assert points[0].protein_target == 0


def test_workout_summary_groups_by_logged_day(
    analytics_service: AnalyticsService, exercise_service, user_id
) -> None:
    for name, category in (("Run", "cardio"), ("Lift", "strength"), ("Bike", "cardio")):
        exercise_service.add_exercise(
            user_id,
            _day(1),
            ExerciseCreate(
                name=name,
                category=category,
                duration_minutes=20,
                calories_burned=100,
            ),
        )
    exercise_service.add_exercise(
        user_id,
        _day(4),
        ExerciseCreate(
            name="Swim",
            category="cardio",
            duration_minutes=40,
            calories_burned=350,
            performed_at=datetime(2024, 5, 11, 7, tzinfo=UTC),
        ),
    )

    days = analytics_service.workout_summary(user_id, 7)

    assert [day.date for day in days] == [_day(4), _day(1)]
    assert days[1].exercise_count == 3
    assert days[1].total_calories == 300
    assert days[1].duration == 60
    assert days[1].categories == ["cardio", "strength"]


def test_exercise_near_midnight_counts_for_its_logged_day(
    analytics_service: AnalyticsService, exercise_service, user_id
) -> None:
    exercise_service.add_exercise(
        user_id,
        _day(2),
        ExerciseCreate(
            name="Late run",
            category="cardio",
            duration_minutes=30,
            calories_burned=300,
            performed_at=datetime(2024, 5, 12, 23, 30, tzinfo=UTC),
        ),
    )

    points = analytics_service.calorie_balance(user_id, 7)
    days = analytics_service.workout_summary(user_id, 7)

    assert exercise_service.daily_totals(user_id, _day(2)) == 300
    assert exercise_service.daily_totals(user_id, _day(3)) == 0
    assert [(point.date, point.burned) for point in points] == [(_day(2), 300)]
    assert [day.date for day in days] == [_day(2)]


def test_injection_adherence_zero_target_scores_zero(
    analytics_service: AnalyticsService, injection_service, user_id
) -> None:
    testosterone = injection_service.create_compound(
        user_id, "Test C", 200.0, "cypionate", 8.0, "trt", 140.0
    )
    peptide = injection_service.create_compound(
        user_id, "BPC", 5.0, "acetate", 0.5, "peptide", 0.0
    )
    injection_service.log_injection(
        user_id, testosterone.id, 20.0, 0.1, "left_glute", _day(1)
    )
    injection_service.log_injection(
        user_id, peptide.id, 0.25, 0.05, "subq_abdomen", _day(1)
    )

    days = analytics_service.injection_adherence(user_id, 7)

    assert len(days) == 1
    assert days[0].total_dose == pytest.approx(20.25)
    assert days[0].compounds == ["Test C", "BPC"]
    assert days[0].adherence_score == pytest.approx(50.0)


def test_nirvana_and_mit_series(
    analytics_service: AnalyticsService, nirvana_service, daily_service, user_id
) -> None:
    nirvana_service.log_session(user_id, _day(2), "mobility", 25, "beginner", 4)
    daily_service.toggle_deep_work(user_id, _day(1))

    sessions = analytics_service.nirvana_sessions(user_id, 7)
    mits = analytics_service.mit_completion(user_id, 7)

    assert sessions[0].quality == 4
    assert mits[0].mit_total == 3
    assert mits[0].deep_work_completed is True


def test_weight_change_uses_latest_sample_on_or_before_boundary() -> None:
    weights = [
        WeightPoint(date(2024, 4, 10), 85.0),
        WeightPoint(date(2024, 5, 1), 82.0),
        WeightPoint(date(2024, 5, 8), 81.0),
        WeightPoint(date(2024, 5, 14), 80.0),
    ]

    assert weight_change(weights, date(2024, 5, 8)) == pytest.approx(-1.0)
    assert weight_change(weights, date(2024, 5, 5)) == pytest.approx(-2.0)
    assert weight_change(weights, date(2024, 4, 15)) == pytest.approx(-5.0)


def test_weight_change_without_prior_sample_is_none() -> None:
    weights = [WeightPoint(date(2024, 5, 14), 80.0)]

    assert weight_change(weights, date(2024, 5, 8)) is None
    assert weight_change([], date(2024, 5, 8)) is None


@pytest.mark.parametrize(
    ("flags", "expected"),
    [
        ([False, True, True], 2),
        ([True, False, True], 1),
        ([True, True, False], 0),
        ([], 0),
    ],
)
def test_deep_work_streak(flags: list[bool], expected: int) -> None:
    assert deep_work_streak(_mit_days(flags)) == expected


def test_mit_completion_rate_empty_is_zero() -> None:
    assert mit_completion_rate([]) == 0


def test_overview(
    analytics_service: AnalyticsService,
    daily_repository,
    goals_service,
    user_id,
) -> None:
    _log(daily_repository, user_id, 40, weight_kg=85.0)
    _log(daily_repository, user_id, 10, weight_kg=82.0, deep_work_completed=True)
    _log(
        daily_repository,
        user_id,
        3,
        weight_kg=81.0,
        calories_consumed=2000.0,
        calories_burned_bmr=1800.0,
        mit_task_1="a",
        mit_task_1_completed=True,
        deep_work_completed=True,
    )
    _log(
        daily_repository,
        user_id,
        1,
        weight_kg=80.0,
        calories_consumed=1600.0,
        calories_burned_bmr=1800.0,
        deep_work_completed=True,
    )
    goals_service.create_milestone(user_id, "Muscle up", "skill", "First rep")
    done = goals_service.create_milestone(user_id, "Plank", "endurance", "5 min")
    goals_service.complete_milestone(user_id, done.id)

    overview = analytics_service.overview(user_id, 30)

    assert overview.days == 30
    assert overview.current_weight == 80.0
    assert overview.weight_change_7d == pytest.approx(-2.0)
    assert overview.weight_change_window == pytest.approx(-5.0)
    assert overview.avg_calorie_balance_7d == pytest.approx(0.0)
    assert overview.mit_completion_rate_7d == pytest.approx(100 / 6)
    assert overview.deep_work_streak == 3
    assert overview.total_workouts_7d == 0
    assert overview.injection_adherence_7d == 0
    assert overview.nirvana_sessions_7d == 0
    assert overview.active_milestones == 1


def test_overview_without_data(analytics_service: AnalyticsService, user_id) -> None:
    overview = analytics_service.overview(user_id, 7)

    assert overview.current_weight is None
    assert overview.weight_change_7d is None
    assert overview.avg_calorie_balance_window is None
    assert overview.mit_completion_rate_window == 0
    assert overview.deep_work_streak == 0
