"""Supabase repository for analyzed meals."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from nutrition_progress.adapters.row_parsing import (
    parse_datetime,
    parse_float,
    parse_optional_float,
)
from nutrition_progress.domain.nutrition import MacroActuals
from nutrition_progress.domain.progress import MealRecord
from nutrition_progress.services.progress import MealRepository


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for reading meal analyses."""

    client: Client

    def list_by_user(self, user_id: UUID) -> list[MealRecord]:
        """Return all meal analyses for a user, newest first."""
        response = (
            self.client.table("meal_analyses")
            .select("id, user_id, created_at, nutrition_data")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> MealRecord:
    data = row.get("nutrition_data")
    totals = data.get("totals") if isinstance(data, dict) else None
    if not isinstance(totals, dict):
        totals = {}
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        created_at=parse_datetime(row.get("created_at")),
        totals=MacroActuals(
            calories=parse_float(totals.get("calories")),
            protein=parse_float(totals.get("protein")),
            carbs=parse_float(totals.get("carbs")),
            fat=parse_float(totals.get("fat")),
            fiber=parse_optional_float(totals.get("fiber")),
            sugar=parse_optional_float(totals.get("sugar")),
        ),
    )
