"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from health_tracker.adapters.supabase_daily_repository import (
    SupabaseDailyEntryRepository,
)
from health_tracker.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from health_tracker.adapters.supabase_food_repository import (
    SupabaseFoodEntryRepository,
)
from health_tracker.adapters.supabase_goals_repository import SupabaseGoalsRepository
from health_tracker.adapters.supabase_injection_repository import (
    SupabaseInjectionRepository,
)
from health_tracker.adapters.supabase_nirvana_repository import (
    SupabaseNirvanaRepository,
)
from health_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_tracker.adapters.supabase_template_repository import (
    SupabaseFoodTemplateRepository,
)
from health_tracker.config import Settings
from health_tracker.services.analytics import AnalyticsService
from health_tracker.services.daily import DailyEntryService
from health_tracker.services.exercise import ExerciseService
from health_tracker.services.food import FoodService
from health_tracker.services.goals import GoalsService
from health_tracker.services.injections import InjectionService
from health_tracker.services.nirvana import NirvanaService
from health_tracker.services.profiles import ProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: ProfileService
    daily_service: DailyEntryService
    food_service: FoodService
    exercise_service: ExerciseService
    injection_service: InjectionService
    nirvana_service: NirvanaService
    goals_service: GoalsService
    analytics_service: AnalyticsService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_repository = SupabaseProfileRepository(supabase_client)
    daily_repository = SupabaseDailyEntryRepository(supabase_client)
    food_repository = SupabaseFoodEntryRepository(supabase_client)
    template_repository = SupabaseFoodTemplateRepository(supabase_client)
    exercise_repository = SupabaseExerciseRepository(supabase_client)
    injection_repository = SupabaseInjectionRepository(supabase_client)
    nirvana_repository = SupabaseNirvanaRepository(supabase_client)
    goals_repository = SupabaseGoalsRepository(supabase_client)

    daily_service = DailyEntryService(daily_repository)
    analytics_service = AnalyticsService(
        daily_repository=daily_repository,
        exercise_repository=exercise_repository,
        injection_repository=injection_repository,
        nirvana_repository=nirvana_repository,
        goals_repository=goals_repository,
        profile_repository=profile_repository,
    )

    return AppContainer(
        settings=resolved_settings,
        profile_service=ProfileService(profile_repository),
        daily_service=daily_service,
        food_service=FoodService(
            daily_service=daily_service,
            repository=food_repository,
            template_repository=template_repository,
        ),
        exercise_service=ExerciseService(
            daily_service=daily_service,
            repository=exercise_repository,
            profile_repository=profile_repository,
        ),
        injection_service=InjectionService(injection_repository),
        nirvana_service=NirvanaService(nirvana_repository),
        goals_service=GoalsService(goals_repository),
        analytics_service=analytics_service,
    )
