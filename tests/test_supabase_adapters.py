"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import uuid4

import pytest

from nutrition_progress.adapters.row_parsing import (
    parse_date,
    parse_datetime,
    parse_float,
    parse_optional_float,
)
from nutrition_progress.adapters.supabase_ketone_repository import (
    SupabaseKetoneRepository,
)
from nutrition_progress.adapters.supabase_meal_repository import (
    SupabaseMealRepository,
)
from nutrition_progress.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from nutrition_progress.adapters.supabase_progress_repository import (
    SupabaseDailyProgressRepository,
    SupabaseWeeklySummaryRepository,
)
from tests.conftest import make_daily, make_profile


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "upsert": [], "delete": []}
    )
    last_payload: object | None = None
    last_on_conflict: str | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lte", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


@pytest.mark.parametrize(
    ("value", "expected"),
    [(12, 12.0), (3.5, 3.5), ("7.25", 7.25), (" 4 ", 4.0), ("abc", None), (None, None)],
)
def test_parse_optional_float(value: object, expected: float | None) -> None:
    assert parse_optional_float(value) == expected


def test_parse_float_default() -> None:
    assert parse_float(None) == 0.0
    assert parse_float("n/a", default=1.5) == 1.5


def test_parse_datetime_normalizes_to_utc() -> None:
    parsed = parse_datetime("2025-01-08T10:00:00Z")

    assert parsed == datetime(2025, 1, 8, 10, 0, tzinfo=UTC)
    assert parse_datetime("2025-01-08T10:00:00").tzinfo is UTC
    with pytest.raises(ValueError):
        parse_datetime(None)


def test_parse_date_accepts_dates_and_timestamps() -> None:
    assert parse_date("2025-01-08") == date(2025, 1, 8)
    assert parse_date("2025-01-08T23:00:00-05:00") == date(2025, 1, 9)
    assert parse_date(date(2025, 1, 8)) == date(2025, 1, 8)


def test_supabase_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profiles")
    user_id = uuid4()
    row = {
        "user_id": str(user_id),
        "diet_type": "keto",
        "daily_calorie_goal": "1800",
        "daily_protein_goal": 120,
        "daily_carbs_goal": 25.0,
        "daily_fat_goal": "140.5",
        "daily_fiber_goal": None,
        "daily_sugar_limit": 10,
        "weight": "72.5",
        "height": 180,
        "age": 35,
        "gender": "male",
        "activity_level": "light",
        "dietary_restrictions": ["dairy"],
    }
    table.queue("select", [row])
    table.queue("upsert", [row])

    repository = SupabaseProfileRepository(client)
    fetched = repository.get_by_user_id(user_id)
    saved = repository.save(make_profile(user_id, weight_kg=72.5))

    assert fetched is not None
    assert fetched.daily_calorie_goal == 1800.0
    assert fetched.daily_fat_goal == 140.5
    assert fetched.daily_fiber_goal is None
    assert fetched.weight_kg == 72.5
    assert fetched.dietary_restrictions == ("dairy",)
    assert saved == fetched
    assert table.last_on_conflict == "user_id"
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["weight"] == 72.5


def test_supabase_profile_repository_missing() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    assert repository.get_by_user_id(uuid4()) is None


def test_supabase_profile_repository_save_failure() -> None:
    repository = SupabaseProfileRepository(FakeSupabaseClient())

    with pytest.raises(RuntimeError):
        repository.save(make_profile(uuid4()))


def test_supabase_meal_repository_reads_totals() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    client.table("meal_analyses").queue(
        "select",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "created_at": "2025-01-08T12:00:00+00:00",
                "nutrition_data": {
                    "totals": {
                        "calories": "650",
                        "protein": 40,
                        "carbs": 55.5,
                        "fat": 20,
                        "fiber": 6,
                    }
                },
            },
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "created_at": "2025-01-08T08:00:00Z",
                "nutrition_data": None,
            },
        ],
    )

    meals = SupabaseMealRepository(client).list_by_user(user_id)

    assert len(meals) == 2
    assert meals[0].totals.calories == 650.0
    assert meals[0].totals.fiber == 6.0
    assert meals[0].totals.sugar is None
    assert meals[1].totals.calories == 0.0


def test_supabase_daily_progress_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_progress")
    user_id = uuid4()
    record = make_daily(user_id, date(2025, 1, 8))
    table.queue(
        "select",
        [
            {
                "user_id": str(user_id),
                "date": "2025-01-08",
                "total_calories": "1950",
                "total_protein": 98.0,
                "total_carbs": 240,
                "total_fat": 60,
                "total_fiber": None,
                "total_sugar": 20,
                "meal_count": 3,
                "goal_calories": 2000,
                "goal_protein": 100,
                "goal_carbs": 250,
                "goal_fat": 67,
                "goal_fiber": None,
                "goal_sugar": 50,
                "is_on_track": True,
                "carbs_compliance": 1,
                "protein_compliance": "1.0",
                "fat_compliance": 0.9,
                "diet_type": "balanced",
            }
        ],
    )

    repository = SupabaseDailyProgressRepository(client)
    repository.upsert(record)
    assert table.last_on_conflict == "user_id,date"
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["date"] == "2025-01-08"

    days = repository.find_range(user_id, date(2025, 1, 6), date(2025, 1, 12))

    assert ("gte", "date", "2025-01-06") in table.last_filters
    assert ("lte", "date", "2025-01-12") in table.last_filters
    assert days[0].date == date(2025, 1, 8)
    assert days[0].total_calories == 1950
    assert days[0].total_fiber == 0
    assert days[0].goal_fiber is None
    assert days[0].fat_compliance == 0.9


def test_supabase_weekly_summary_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("weekly_summaries")
    user_id = uuid4()
    table.queue(
        "select",
        [
            {
                "user_id": str(user_id),
                "week_start": "2025-01-06",
                "week_end": "2025-01-12",
                "avg_calories": 1900,
                "avg_protein": "95",
                "avg_carbs": 230,
                "avg_fat": 64,
                "avg_fiber": 22,
                "avg_sugar": 31,
                "total_meals": 18,
                "days_tracked": 6,
                "compliance_rate": "0.5",
            }
        ],
    )

    repository = SupabaseWeeklySummaryRepository(client)
    weeks = repository.find_recent(user_id, 12)

    assert weeks[0].week_start == date(2025, 1, 6)
    assert weeks[0].avg_protein == 95
    assert weeks[0].compliance_rate == 0.5

    repository.upsert(weeks[0])
    assert table.last_on_conflict == "user_id,week_start"


def test_supabase_ketone_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("ketone_logs")
    user_id = uuid4()
    log_id = uuid4()
    row = {
        "id": str(log_id),
        "user_id": str(user_id),
        "timestamp": "2025-01-08T07:00:00Z",
        "ketone_level": "1.2",
        "measurement_type": "blood",
        "notes": None,
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("delete", [row])

    repository = SupabaseKetoneRepository(client)
    created = repository.create(
        user_id, 1.2, "blood", None, datetime(2025, 1, 8, 7, 0, tzinfo=UTC)
    )
    recent = repository.list_recent(user_id, 30)

    assert created.id == log_id
    assert created.ketone_level == 1.2
    assert recent == [created]
    assert repository.delete(user_id, log_id) is True
    assert ("eq", "user_id", str(user_id)) in table.last_filters
    assert repository.delete(user_id, log_id) is False
