"""Supabase repositories for daily progress and weekly summaries."""

from dataclasses import dataclass
from datetime import UTC, date, datetime
from uuid import UUID

from supabase import Client

from nutrition_progress.adapters.row_parsing import (
    parse_date,
    parse_float,
    parse_optional_float,
)
from nutrition_progress.domain.progress import DailyProgressRecord, WeeklySummary
from nutrition_progress.services.progress import (
    DailyProgressRepository,
    WeeklySummaryRepository,
)

_DAILY_COLUMNS = (
    "user_id, date, total_calories, total_protein, total_carbs, total_fat, "
    "total_fiber, total_sugar, meal_count, goal_calories, goal_protein, "
    "goal_carbs, goal_fat, goal_fiber, goal_sugar, is_on_track, "
    "carbs_compliance, protein_compliance, fat_compliance, diet_type"
)
_WEEKLY_COLUMNS = (
    "user_id, week_start, week_end, avg_calories, avg_protein, avg_carbs, "
    "avg_fat, avg_fiber, avg_sugar, total_meals, days_tracked, compliance_rate"
)


@dataclass
class SupabaseDailyProgressRepository(DailyProgressRepository):
    """Supabase implementation for daily progress records."""

    client: Client

    def upsert(self, record: DailyProgressRecord) -> None:
        """Create or replace the row keyed on (user_id, date)."""
        self.client.table("daily_progress").upsert(
            {
                "user_id": str(record.user_id),
                "date": record.date.isoformat(),
                "total_calories": record.total_calories,
                "total_protein": record.total_protein,
                "total_carbs": record.total_carbs,
                "total_fat": record.total_fat,
                "total_fiber": record.total_fiber,
                "total_sugar": record.total_sugar,
                "meal_count": record.meal_count,
                "goal_calories": record.goal_calories,
                "goal_protein": record.goal_protein,
                "goal_carbs": record.goal_carbs,
                "goal_fat": record.goal_fat,
                "goal_fiber": record.goal_fiber,
                "goal_sugar": record.goal_sugar,
                "is_on_track": record.is_on_track,
                "carbs_compliance": record.carbs_compliance,
                "protein_compliance": record.protein_compliance,
                "fat_compliance": record.fat_compliance,
                "diet_type": record.diet_type,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="user_id,date",
        ).execute()

    def find_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyProgressRecord]:
        """Return rows with start <= date <= end, oldest first."""
        response = (
            self.client.table("daily_progress")
            .select(_DAILY_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_daily_row(row) for row in response.data or []]


@dataclass
class SupabaseWeeklySummaryRepository(WeeklySummaryRepository):
    """Supabase implementation for weekly summaries."""

    client: Client

    def upsert(self, summary: WeeklySummary) -> None:
        """Create or replace the row keyed on (user_id, week_start)."""
        self.client.table("weekly_summaries").upsert(
            {
                "user_id": str(summary.user_id),
                "week_start": summary.week_start.isoformat(),
                "week_end": summary.week_end.isoformat(),
                "avg_calories": summary.avg_calories,
                "avg_protein": summary.avg_protein,
                "avg_carbs": summary.avg_carbs,
                "avg_fat": summary.avg_fat,
                "avg_fiber": summary.avg_fiber,
                "avg_sugar": summary.avg_sugar,
                "total_meals": summary.total_meals,
                "days_tracked": summary.days_tracked,
                "compliance_rate": summary.compliance_rate,
            },
            on_conflict="user_id,week_start",
        ).execute()

    def find_recent(self, user_id: UUID, limit: int) -> list[WeeklySummary]:
        """Return the most recent summaries first."""
        response = (
            self.client.table("weekly_summaries")
            .select(_WEEKLY_COLUMNS)
            .eq("user_id", str(user_id))
            .order("week_start", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_weekly_row(row) for row in response.data or []]


def _parse_daily_row(row: dict[str, object]) -> DailyProgressRecord:
    return DailyProgressRecord(
        user_id=UUID(str(row["user_id"])),
        date=parse_date(row.get("date")),
        total_calories=_int(row.get("total_calories")),
        total_protein=_int(row.get("total_protein")),
        total_carbs=_int(row.get("total_carbs")),
        total_fat=_int(row.get("total_fat")),
        total_fiber=_int(row.get("total_fiber")),
        total_sugar=_int(row.get("total_sugar")),
        meal_count=_int(row.get("meal_count")),
        goal_calories=parse_float(row.get("goal_calories")),
        goal_protein=parse_float(row.get("goal_protein")),
        goal_carbs=parse_float(row.get("goal_carbs")),
        goal_fat=parse_float(row.get("goal_fat")),
        goal_fiber=parse_optional_float(row.get("goal_fiber")),
        goal_sugar=parse_optional_float(row.get("goal_sugar")),
        is_on_track=bool(row.get("is_on_track")),
        carbs_compliance=parse_float(row.get("carbs_compliance")),
        protein_compliance=parse_float(row.get("protein_compliance")),
        fat_compliance=parse_float(row.get("fat_compliance")),
        diet_type=str(row.get("diet_type") or "balanced"),
    )


def _parse_weekly_row(row: dict[str, object]) -> WeeklySummary:
    return WeeklySummary(
        user_id=UUID(str(row["user_id"])),
        week_start=parse_date(row.get("week_start")),
        week_end=parse_date(row.get("week_end")),
        avg_calories=_int(row.get("avg_calories")),
        avg_protein=_int(row.get("avg_protein")),
        avg_carbs=_int(row.get("avg_carbs")),
        avg_fat=_int(row.get("avg_fat")),
        avg_fiber=_int(row.get("avg_fiber")),
        avg_sugar=_int(row.get("avg_sugar")),
        total_meals=_int(row.get("total_meals")),
        days_tracked=_int(row.get("days_tracked")),
        compliance_rate=parse_float(row.get("compliance_rate")),
    )


def _int(value: object) -> int:
    return int(parse_float(value))
