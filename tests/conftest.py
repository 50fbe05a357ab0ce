"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrition_progress.config import Settings
from nutrition_progress.containers import AppContainer
from nutrition_progress.domain.ketones import KetoneLog
from nutrition_progress.domain.nutrition import MacroActuals
from nutrition_progress.domain.profiles import UserProfile
from nutrition_progress.domain.progress import (
    DailyProgressRecord,
    MealRecord,
    WeeklySummary,
)
from nutrition_progress.services.clock import Clock
from nutrition_progress.services.ketosis import KetoneRepository, KetoneService
from nutrition_progress.services.profiles import ProfileRepository, ProfileService
from nutrition_progress.services.progress import (
    DailyProgressRepository,
    MealRepository,
    ProgressService,
    WeeklySummaryRepository,
)

API_TOKEN = "api-token"


@dataclass
class FixedClock(Clock):
    """Clock frozen at a configurable instant."""

    current: datetime = field(
        default_factory=lambda: datetime(2025, 1, 8, 15, 30, tzinfo=UTC)
    )

    def now(self) -> datetime:
        return self.current


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, UserProfile] = field(default_factory=dict)

    def get_by_user_id(self, user_id: UUID) -> UserProfile | None:
        return self.profiles.get(user_id)

    def save(self, profile: UserProfile) -> UserProfile:
        self.profiles[profile.user_id] = profile
        return profile


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: list[MealRecord] = field(default_factory=list)

    def add(
        self, user_id: UUID, created_at: datetime, **totals: float
    ) -> MealRecord:
        meal = MealRecord(
            id=uuid4(),
            user_id=user_id,
            created_at=created_at,
            totals=MacroActuals(
                calories=totals.get("calories", 0),
                protein=totals.get("protein", 0),
                carbs=totals.get("carbs", 0),
                fat=totals.get("fat", 0),
                fiber=totals.get("fiber"),
                sugar=totals.get("sugar"),
            ),
        )
        self.meals.append(meal)
        return meal

    def list_by_user(self, user_id: UUID) -> list[MealRecord]:
        return [meal for meal in self.meals if meal.user_id == user_id]


@dataclass
class InMemoryDailyProgressRepository(DailyProgressRepository):
    """In-memory daily progress repository for tests."""

    records: dict[tuple[UUID, date], DailyProgressRecord] = field(
        default_factory=dict
    )
    upserts: int = 0

    def upsert(self, record: DailyProgressRecord) -> None:
        self.upserts += 1
        self.records[(record.user_id, record.date)] = record

    def find_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyProgressRecord]:
        return [
            record
            for (owner, day), record in self.records.items()
            if owner == user_id and start <= day <= end
        ]


@dataclass
class InMemoryWeeklySummaryRepository(WeeklySummaryRepository):
    """In-memory weekly summary repository for tests."""

    summaries: dict[tuple[UUID, date], WeeklySummary] = field(default_factory=dict)

    def upsert(self, summary: WeeklySummary) -> None:
        self.summaries[(summary.user_id, summary.week_start)] = summary

    def find_recent(self, user_id: UUID, limit: int) -> list[WeeklySummary]:
        owned = [s for (owner, _), s in self.summaries.items() if owner == user_id]
        return sorted(owned, key=lambda s: s.week_start, reverse=True)[:limit]


@dataclass
class InMemoryKetoneRepository(KetoneRepository):
    """In-memory ketone repository for tests."""

    logs: list[KetoneLog] = field(default_factory=list)

    def create(
        self,
        user_id: UUID,
        ketone_level: float,
        measurement_type: str,
        notes: str | None,
        timestamp: datetime,
    ) -> KetoneLog:
        log = KetoneLog(
            id=uuid4(),
            user_id=user_id,
            timestamp=timestamp,
            ketone_level=ketone_level,
            measurement_type=measurement_type,
            notes=notes,
        )
        self.logs.append(log)
        return log

    def list_recent(self, user_id: UUID, limit: int) -> list[KetoneLog]:
        owned = [log for log in self.logs if log.user_id == user_id]
        return sorted(owned, key=lambda log: log.timestamp, reverse=True)[:limit]

    def delete(self, user_id: UUID, log_id: UUID) -> bool:
        for log in self.logs:
            if log.id == log_id and log.user_id == user_id:
                self.logs.remove(log)
                return True
        return False


def make_profile(user_id: UUID, **overrides: object) -> UserProfile:
    """Return a balanced-diet profile with round goals."""
    profile = UserProfile(
        user_id=user_id,
        diet_type="balanced",
        daily_calorie_goal=2000,
        daily_protein_goal=100,
        daily_carbs_goal=250,
        daily_fat_goal=67,
        daily_fiber_goal=25,
        daily_sugar_limit=50,
    )
    return replace(profile, **overrides)


def make_daily(user_id: UUID, day: date, **overrides: object) -> DailyProgressRecord:
    """Return a daily record with goals met."""
    record = DailyProgressRecord(
        user_id=user_id,
        date=day,
        total_calories=2000,
        total_protein=100,
        total_carbs=250,
        total_fat=67,
        total_fiber=25,
        total_sugar=30,
        meal_count=3,
        goal_calories=2000,
        goal_protein=100,
        goal_carbs=250,
        goal_fat=67,
        goal_fiber=25,
        goal_sugar=50,
        is_on_track=True,
        carbs_compliance=1.0,
        protein_compliance=1.0,
        fat_compliance=1.0,
        diet_type="balanced",
    )
    return replace(record, **overrides)


def auth_headers(user_id: UUID) -> dict[str, str]:
    """Return headers identifying a user to the API."""
    return {"X-Api-Token": API_TOKEN, "X-User-Id": str(user_id)}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token=API_TOKEN,
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def profile_repository() -> InMemoryProfileRepository:
    return InMemoryProfileRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def progress_repository() -> InMemoryDailyProgressRepository:
    return InMemoryDailyProgressRepository()


@pytest.fixture
def weekly_repository() -> InMemoryWeeklySummaryRepository:
    return InMemoryWeeklySummaryRepository()


@pytest.fixture
def ketone_repository() -> InMemoryKetoneRepository:
    return InMemoryKetoneRepository()


@pytest.fixture
def progress_service(
    profile_repository: InMemoryProfileRepository,
    meal_repository: InMemoryMealRepository,
    progress_repository: InMemoryDailyProgressRepository,
    weekly_repository: InMemoryWeeklySummaryRepository,
    clock: FixedClock,
) -> ProgressService:
    return ProgressService(
        profile_repository=profile_repository,
        meal_repository=meal_repository,
        progress_repository=progress_repository,
        weekly_repository=weekly_repository,
        clock=clock,
    )


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    profile_repository: InMemoryProfileRepository,
    ketone_repository: InMemoryKetoneRepository,
    progress_service: ProgressService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        clock=clock,
        profile_service=ProfileService(profile_repository),
        progress_service=progress_service,
        ketone_service=KetoneService(repository=ketone_repository, clock=clock),
    )
