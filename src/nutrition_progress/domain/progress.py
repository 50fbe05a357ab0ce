"""Domain models for daily, weekly and monthly progress."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID

from nutrition_progress.domain.nutrition import MacroActuals


@dataclass(frozen=True)
class MealRecord:
    """Logged meal with its estimated nutrition totals."""

    id: UUID
    user_id: UUID
    created_at: datetime
    totals: MacroActuals


@dataclass(frozen=True)
class DailyProgressRecord:
    """Summed intake and compliance for one user on one UTC day."""

    user_id: UUID
    date: date
    total_calories: int
    total_protein: int
    total_carbs: int
    total_fat: int
    total_fiber: int
    total_sugar: int
    meal_count: int
    goal_calories: float
    goal_protein: float
    goal_carbs: float
    goal_fat: float
    goal_fiber: float | None
    goal_sugar: float | None
    is_on_track: bool
    carbs_compliance: float
    protein_compliance: float
    fat_compliance: float
    diet_type: str


@dataclass(frozen=True)
class WeeklySummary:
    """Averages over the tracked days of one Monday-based week."""

    user_id: UUID
    week_start: date
    week_end: date
    avg_calories: int
    avg_protein: int
    avg_carbs: int
    avg_fat: int
    avg_fiber: int
    avg_sugar: int
    total_meals: int
    days_tracked: int
    compliance_rate: float


class Trend(str, Enum):
    """Direction of compliance over recent weeks."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass(frozen=True)
class MonthlySummary:
    """Compliance roll-up over the most recent weekly summaries."""

    total_weeks: int
    avg_compliance_rate: float
    trend: Trend
