"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest
from fastapi.testclient import TestClient

from health_tracker.api.app import create_app
from health_tracker.config import Settings
from health_tracker.containers import AppContainer
from health_tracker.domain.daily import MIT_SLOTS, DailyEntry, MitTask
from health_tracker.domain.exercise import ExerciseEntry
from health_tracker.domain.food import FoodEntry, FoodTemplate
from health_tracker.domain.goals import ProgressMilestone, WeeklyEntry, WeeklyObjective
from health_tracker.domain.injections import InjectableCompound, InjectionEntry
from health_tracker.domain.nirvana import NirvanaSession
from health_tracker.domain.profiles import UserProfile
from health_tracker.services.analytics import AnalyticsService
from health_tracker.services.daily import DailyEntryRepository, DailyEntryService
from health_tracker.services.exercise import ExerciseRepository, ExerciseService
from health_tracker.services.food import (
    FoodEntryRepository,
    FoodService,
    FoodTemplateRepository,
)
from health_tracker.services.goals import (
    OBJECTIVE_SLOTS,
    GoalsRepository,
    GoalsService,
)
from health_tracker.services.injections import InjectionRepository, InjectionService
from health_tracker.services.nirvana import NirvanaRepository, NirvanaService
from health_tracker.services.profiles import ProfileRepository, ProfileService

TODAY = date(2024, 5, 15)
NOW = datetime(2024, 5, 15, 9, 30, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


def fixed_today() -> date:
    return TODAY


def _parse_date(value: object) -> date | None:
    if isinstance(value, str) and value:
        return date.fromisoformat(value)
    return None


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)
    updates: list[dict[str, object]] = field(default_factory=list)

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def create_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        profile = UserProfile(user_id=user_id, **payload)
        self.profiles[user_id] = profile
        return profile

    def update_profile(
        self, user_id: UUID, payload: dict[str, object]
    ) -> UserProfile:
        self.updates.append(dict(payload))
        profile = replace(self.profiles[user_id], **payload)
        self.profiles[user_id] = profile
        return profile

    def delete_profile(self, user_id: UUID) -> None:
        self.profiles.pop(user_id, None)


def _apply_daily(entry: DailyEntry, payload: dict[str, object]) -> DailyEntry:
    values = dict(payload)
    tasks = list(entry.mit_tasks)
    for slot in MIT_SLOTS:
        description_key = f"mit_task_{slot}"
        completed_key = f"mit_task_{slot}_completed"
        if description_key in values or completed_key in values:
            current = tasks[slot - 1]
            tasks[slot - 1] = MitTask(
                description=values.pop(description_key, current.description) or None,
                completed=bool(values.pop(completed_key, current.completed)),
            )
    return replace(entry, mit_tasks=tuple(tasks), **values)


@dataclass
class InMemoryDailyEntryRepository(DailyEntryRepository):
    """In-memory daily entry repository for tests."""

    entries: dict[tuple[UUID, date], DailyEntry] = field(default_factory=dict)
    writes: int = 0

    def get_entry(self, user_id: UUID, day: date) -> DailyEntry | None:
        return self.entries.get((user_id, day))

    def get_entry_by_id(self, entry_id: UUID) -> DailyEntry | None:
        for entry in self.entries.values():
            if entry.id == entry_id:
                return entry
        return None

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        self.writes += 1
        entry = _apply_daily(DailyEntry(id=uuid4(), user_id=user_id, date=day), payload)
        self.entries[(user_id, day)] = entry
        return entry

    def update_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> DailyEntry:
        self.writes += 1
        entry = _apply_daily(self.entries[(user_id, day)], payload)
        self.entries[(user_id, day)] = entry
        return entry

    def list_entries(
        self,
        user_id: UUID,
        start: date | None = None,
        end: date | None = None,
        *,
        descending: bool = False,
    ) -> list[DailyEntry]:
        rows = [
            entry
            for (owner, day), entry in self.entries.items()
            if owner == user_id
            and (start is None or day >= start)
            and (end is None or day <= end)
        ]
        return sorted(rows, key=lambda entry: entry.date, reverse=descending)


@dataclass
class InMemoryFoodEntryRepository(FoodEntryRepository):
    """In-memory food entry repository for tests."""

    entries: dict[UUID, FoodEntry] = field(default_factory=dict)

    def create_food_entry(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> FoodEntry:
        values = dict(payload)
        consumed_at = datetime.fromisoformat(str(values.pop("consumed_at")))
        entry = FoodEntry(
            id=uuid4(),
            user_id=daily_entry.user_id,
            daily_entry_id=daily_entry.id,
            entry_date=daily_entry.date,
            consumed_at=consumed_at,
            **values,
        )
        self.entries[entry.id] = entry
        return entry

    def get_food_entry(self, entry_id: UUID) -> FoodEntry | None:
        return self.entries.get(entry_id)

    def list_food_entries(self, daily_entry_id: UUID) -> list[FoodEntry]:
        rows = [
            entry
            for entry in self.entries.values()
            if entry.daily_entry_id == daily_entry_id
        ]
        return sorted(rows, key=lambda entry: entry.consumed_at)

    def update_food_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodEntry:
        entry = replace(self.entries[entry_id], **payload)
        self.entries[entry_id] = entry
        return entry

    def delete_food_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)


@dataclass
class InMemoryFoodTemplateRepository(FoodTemplateRepository):
    """In-memory food template repository for tests."""

    templates: dict[UUID, FoodTemplate] = field(default_factory=dict)

    def create_template(
        self, user_id: UUID, payload: dict[str, object]
    ) -> FoodTemplate:
        template = FoodTemplate(
            id=uuid4(),
            user_id=user_id,
            is_favorite=False,
            usage_count=0,
            last_used=None,
            **payload,
        )
        self.templates[template.id] = template
        return template

    def get_template(self, template_id: UUID) -> FoodTemplate | None:
        return self.templates.get(template_id)

    def list_templates(self, user_id: UUID) -> list[FoodTemplate]:
        return [item for item in self.templates.values() if item.user_id == user_id]

    def increment_usage(self, template_id: UUID, used_at: datetime) -> None:
        template = self.templates.get(template_id)
        if template is None:
            return
        self.templates[template_id] = replace(
            template, usage_count=template.usage_count + 1, last_used=used_at
        )

    def delete_template(self, template_id: UUID) -> None:
        self.templates.pop(template_id, None)


@dataclass
class InMemoryExerciseRepository(ExerciseRepository):
    """In-memory exercise repository for tests."""

    exercises: dict[UUID, ExerciseEntry] = field(default_factory=dict)

    def create_exercise(
        self, daily_entry: DailyEntry, payload: dict[str, object]
    ) -> ExerciseEntry:
        values = dict(payload)
        performed_at = datetime.fromisoformat(str(values.pop("performed_at")))
        exercise = ExerciseEntry(
            id=uuid4(),
            user_id=daily_entry.user_id,
            daily_entry_id=daily_entry.id,
            entry_date=daily_entry.date,
            performed_at=performed_at,
            **values,
        )
        self.exercises[exercise.id] = exercise
        return exercise

    def get_exercise(self, exercise_id: UUID) -> ExerciseEntry | None:
        return self.exercises.get(exercise_id)

    def list_exercises(self, daily_entry_id: UUID) -> list[ExerciseEntry]:
        rows = [
            item
            for item in self.exercises.values()
            if item.daily_entry_id == daily_entry_id
        ]
        return sorted(rows, key=lambda item: item.performed_at)

    def list_exercises_since(self, user_id: UUID, start: date) -> list[ExerciseEntry]:
        rows = [
            item
            for item in self.exercises.values()
            if item.user_id == user_id and item.entry_date >= start
        ]
        return sorted(rows, key=lambda item: item.performed_at)

    def delete_exercise(self, exercise_id: UUID) -> None:
        self.exercises.pop(exercise_id, None)


@dataclass
class InMemoryInjectionRepository(InjectionRepository):
    """In-memory compound and injection repository for tests."""

    compounds: dict[UUID, InjectableCompound] = field(default_factory=dict)
    injections: dict[UUID, InjectionEntry] = field(default_factory=dict)

    def create_compound(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        compound = InjectableCompound(id=uuid4(), user_id=user_id, **payload)
        self.compounds[compound.id] = compound
        return compound

    def get_compound(self, compound_id: UUID) -> InjectableCompound | None:
        return self.compounds.get(compound_id)

    def list_compounds(self, user_id: UUID) -> list[InjectableCompound]:
        rows = [item for item in self.compounds.values() if item.user_id == user_id]
        return sorted(rows, key=lambda item: item.name)

    def update_compound(
        self, compound_id: UUID, payload: dict[str, object]
    ) -> InjectableCompound:
        compound = replace(self.compounds[compound_id], **payload)
        self.compounds[compound_id] = compound
        return compound

    def delete_compound(self, compound_id: UUID) -> None:
        self.compounds.pop(compound_id, None)

    def create_injection(
        self, user_id: UUID, payload: dict[str, object]
    ) -> InjectionEntry:
        compound = self.compounds[UUID(str(payload["compound_id"]))]
        injection = InjectionEntry(
            id=uuid4(),
            user_id=user_id,
            compound_id=compound.id,
            dose_mg=float(payload["dose_mg"]),
            volume_ml=float(payload["volume_ml"]),
            injection_site=payload["injection_site"],
            injection_date=date.fromisoformat(str(payload["injection_date"])),
            compound_name=compound.name,
            compound_weekly_target_mg=compound.weekly_target_mg,
            notes=payload.get("notes"),
        )
        self.injections[injection.id] = injection
        return injection

    def list_injections(
        self, user_id: UUID, start: date | None = None
    ) -> list[InjectionEntry]:
        rows = [
            item
            for item in self.injections.values()
            if item.user_id == user_id
            and (start is None or item.injection_date >= start)
        ]
        return sorted(rows, key=lambda item: item.injection_date)

    def get_injection(self, injection_id: UUID) -> InjectionEntry | None:
        return self.injections.get(injection_id)

    def delete_injection(self, injection_id: UUID) -> None:
        self.injections.pop(injection_id, None)


@dataclass
class InMemoryNirvanaRepository(NirvanaRepository):
    """In-memory Nirvana session repository for tests."""

    sessions: list[NirvanaSession] = field(default_factory=list)

    def create_session(
        self, user_id: UUID, payload: dict[str, object]
    ) -> NirvanaSession:
        values = dict(payload)
        session_date = date.fromisoformat(str(values.pop("session_date")))
        session = NirvanaSession(
            id=uuid4(), user_id=user_id, session_date=session_date, **values
        )
        self.sessions.append(session)
        return session

    def list_sessions(
        self, user_id: UUID, start: date | None = None
    ) -> list[NirvanaSession]:
        rows = [
            item
            for item in self.sessions
            if item.user_id == user_id and (start is None or item.session_date >= start)
        ]
        return sorted(rows, key=lambda item: item.session_date)


@dataclass
class InMemoryGoalsRepository(GoalsRepository):
    """In-memory milestone and weekly entry repository for tests."""

    milestones: dict[UUID, ProgressMilestone] = field(default_factory=dict)
    weekly: dict[tuple[UUID, date], WeeklyEntry] = field(default_factory=dict)

    def create_milestone(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        values = dict(payload)
        milestone = ProgressMilestone(
            id=uuid4(),
            user_id=user_id,
            name=str(values["name"]),
            category=values["category"],
            description=str(values["description"]),
            target_date=_parse_date(values.get("target_date")),
            completed_date=None,
            is_completed=bool(values["is_completed"]),
            progress_percentage=float(values["progress_percentage"]),
            created_at=datetime.now(tz=UTC),
        )
        self.milestones[milestone.id] = milestone
        return milestone

    def get_milestone(self, milestone_id: UUID) -> ProgressMilestone | None:
        return self.milestones.get(milestone_id)

    def update_milestone(
        self, milestone_id: UUID, payload: dict[str, object]
    ) -> ProgressMilestone:
        values = dict(payload)
        if "completed_date" in values:
            values["completed_date"] = _parse_date(values["completed_date"])
        milestone = replace(self.milestones[milestone_id], **values)
        self.milestones[milestone_id] = milestone
        return milestone

    def list_milestones(self, user_id: UUID) -> list[ProgressMilestone]:
        return [item for item in self.milestones.values() if item.user_id == user_id]

    def get_weekly_entry(self, user_id: UUID, start: date) -> WeeklyEntry | None:
        return self.weekly.get((user_id, start))

    def save_weekly_entry(
        self, user_id: UUID, start: date, payload: dict[str, object]
    ) -> WeeklyEntry:
        existing = self.weekly.get((user_id, start))
        objectives = tuple(
            WeeklyObjective(
                description=payload.get(f"objective_{slot}"),
                completed=bool(payload.get(f"objective_{slot}_completed")),
            )
            for slot in OBJECTIVE_SLOTS
        )
        entry = WeeklyEntry(
            id=existing.id if existing else uuid4(),
            user_id=user_id,
            week_start_date=start,
            objectives=objectives,
            completion_rate=payload.get("completion_rate"),
            insights=payload.get("insights", existing.insights if existing else None),
            next_week_focus=payload.get(
                "next_week_focus", existing.next_week_focus if existing else None
            ),
        )
        self.weekly[(user_id, start)] = entry
        return entry

    def list_weekly_entries(self, user_id: UUID, start: date) -> list[WeeklyEntry]:
        rows = [
            entry
            for (owner, week), entry in self.weekly.items()
            if owner == user_id and week >= start
        ]
        return sorted(rows, key=lambda entry: entry.week_start_date)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def daily_repository() -> InMemoryDailyEntryRepository:
    return InMemoryDailyEntryRepository()


@pytest.fixture
def food_repository() -> InMemoryFoodEntryRepository:
    return InMemoryFoodEntryRepository()


@pytest.fixture
def template_repository() -> InMemoryFoodTemplateRepository:
    return InMemoryFoodTemplateRepository()


@pytest.fixture
def exercise_repository() -> InMemoryExerciseRepository:
    return InMemoryExerciseRepository()


@pytest.fixture
def injection_repository() -> InMemoryInjectionRepository:
    return InMemoryInjectionRepository()


@pytest.fixture
def nirvana_repository() -> InMemoryNirvanaRepository:
    return InMemoryNirvanaRepository()


@pytest.fixture
def goals_repository() -> InMemoryGoalsRepository:
    return InMemoryGoalsRepository()


@pytest.fixture
def profile_service(profile_repository: InMemoryProfileRepository) -> ProfileService:
    return ProfileService(profile_repository)


@pytest.fixture
def daily_service(daily_repository: InMemoryDailyEntryRepository) -> DailyEntryService:
    return DailyEntryService(daily_repository)


@pytest.fixture
def food_service(
    daily_service: DailyEntryService,
    food_repository: InMemoryFoodEntryRepository,
    template_repository: InMemoryFoodTemplateRepository,
) -> FoodService:
    return FoodService(
        daily_service=daily_service,
        repository=food_repository,
        template_repository=template_repository,
        clock=fixed_clock,
    )


@pytest.fixture
def exercise_service(
    daily_service: DailyEntryService,
    exercise_repository: InMemoryExerciseRepository,
    profile_repository: InMemoryProfileRepository,
) -> ExerciseService:
    return ExerciseService(
        daily_service=daily_service,
        repository=exercise_repository,
        profile_repository=profile_repository,
        clock=fixed_clock,
    )


@pytest.fixture
def injection_service(
    injection_repository: InMemoryInjectionRepository,
) -> InjectionService:
    return InjectionService(injection_repository)


@pytest.fixture
def nirvana_service(nirvana_repository: InMemoryNirvanaRepository) -> NirvanaService:
    return NirvanaService(nirvana_repository)


@pytest.fixture
def goals_service(goals_repository: InMemoryGoalsRepository) -> GoalsService:
    return GoalsService(goals_repository, today=fixed_today)


@pytest.fixture
def analytics_service(  # noqa: PLR0913
    daily_repository: InMemoryDailyEntryRepository,
    exercise_repository: InMemoryExerciseRepository,
    injection_repository: InMemoryInjectionRepository,
    nirvana_repository: InMemoryNirvanaRepository,
    goals_repository: InMemoryGoalsRepository,
    profile_repository: InMemoryProfileRepository,
) -> AnalyticsService:
    return AnalyticsService(
        daily_repository=daily_repository,
        exercise_repository=exercise_repository,
        injection_repository=injection_repository,
        nirvana_repository=nirvana_repository,
        goals_repository=goals_repository,
        profile_repository=profile_repository,
        today=fixed_today,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    profile_service: ProfileService,
    daily_service: DailyEntryService,
    food_service: FoodService,
    exercise_service: ExerciseService,
    injection_service: InjectionService,
    nirvana_service: NirvanaService,
    goals_service: GoalsService,
    analytics_service: AnalyticsService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        daily_service=daily_service,
        food_service=food_service,
        exercise_service=exercise_service,
        injection_service=injection_service,
        nirvana_service=nirvana_service,
        goals_service=goals_service,
        analytics_service=analytics_service,
    )


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))
