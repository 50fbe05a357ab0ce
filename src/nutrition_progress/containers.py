"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from nutrition_progress.adapters.supabase_ketone_repository import (
    SupabaseKetoneRepository,
)
from nutrition_progress.adapters.supabase_meal_repository import SupabaseMealRepository
from nutrition_progress.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_progress.adapters.supabase_progress_repository import (
    SupabaseDailyProgressRepository,
    SupabaseWeeklySummaryRepository,
)
from nutrition_progress.config import Settings
from nutrition_progress.services.clock import Clock, SystemClock
from nutrition_progress.services.ketosis import KetoneService
from nutrition_progress.services.profiles import ProfileService
from nutrition_progress.services.progress import ProgressService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    profile_service: ProfileService
    progress_service: ProgressService
    ketone_service: KetoneService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    clock = SystemClock()
    profile_repository = SupabaseProfileRepository(supabase_client)
    profile_service = ProfileService(profile_repository)
    progress_service = ProgressService(
        profile_repository=profile_repository,
        meal_repository=SupabaseMealRepository(supabase_client),
        progress_repository=SupabaseDailyProgressRepository(supabase_client),
        weekly_repository=SupabaseWeeklySummaryRepository(supabase_client),
        clock=clock,
        monthly_weeks=resolved_settings.monthly_weeks,
    )
    ketone_service = KetoneService(
        repository=SupabaseKetoneRepository(supabase_client),
        clock=clock,
    )

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        profile_service=profile_service,
        progress_service=progress_service,
        ketone_service=ketone_service,
    )
