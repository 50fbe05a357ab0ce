"""Daily progress tracking and weekly/monthly roll-ups."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_progress.domain.diets import lookup
from nutrition_progress.domain.nutrition import MacroActuals, RemainingBudget
from nutrition_progress.domain.progress import (
    DailyProgressRecord,
    MealRecord,
    MonthlySummary,
    Trend,
    WeeklySummary,
)
from nutrition_progress.services.clock import Clock, SystemClock
from nutrition_progress.services.compliance import score
from nutrition_progress.services.profiles import ProfileRepository
from nutrition_progress.services.rounding import round_half_up

_logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7
TREND_WINDOW_WEEKS = 4
TREND_THRESHOLD = 0.1


class MealRepository(Protocol):
    """Read access to logged meals."""

    def list_by_user(self, user_id: UUID) -> list[MealRecord]:
        """Return all meals logged by a user."""


class DailyProgressRepository(Protocol):
    """Persistence interface for daily progress records."""

    def upsert(self, record: DailyProgressRecord) -> None:
        """Create or replace the record for (user_id, date)."""

    def find_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyProgressRecord]:
        """Return records with start <= date <= end."""


class WeeklySummaryRepository(Protocol):
    """Persistence interface for weekly summaries."""

    def upsert(self, summary: WeeklySummary) -> None:
        """Create or replace the summary for (user_id, week_start)."""

    def find_recent(self, user_id: UUID, limit: int) -> list[WeeklySummary]:
        """Return up to limit summaries, most recent week first."""


@dataclass
class ProgressService:
    """Recomputes daily progress and aggregates it into weeks and months."""

    profile_repository: ProfileRepository
    meal_repository: MealRepository
    progress_repository: DailyProgressRepository
    weekly_repository: WeeklySummaryRepository
    clock: Clock = field(default_factory=SystemClock)
    monthly_weeks: int = 12

    def today(self) -> date:
        """Return the current UTC date."""
        return self.clock.now().astimezone(UTC).date()

    def update_daily_progress(self, user_id: UUID) -> DailyProgressRecord | None:
        """Recompute and store today's progress from all of today's meals.

        Returns None when the user has not set up a profile yet.
        """
        profile = self.profile_repository.get_by_user_id(user_id)
        if profile is None:
            return None

        today = self.today()
        meals = [
            meal
            for meal in self.meal_repository.list_by_user(user_id)
            if _utc_date(meal.created_at) == today
        ]
        totals = sum_meal_totals(meals)
        template = lookup(profile.diet_type)
        goals = profile.goals()
        compliance = score(totals, goals, template)

        record = DailyProgressRecord(
            user_id=user_id,
            date=today,
            total_calories=round_half_up(totals.calories),
            total_protein=round_half_up(totals.protein),
            total_carbs=round_half_up(totals.carbs),
            total_fat=round_half_up(totals.fat),
            total_fiber=round_half_up(totals.fiber or 0),
            total_sugar=round_half_up(totals.sugar or 0),
            meal_count=len(meals),
            goal_calories=profile.daily_calorie_goal,
            goal_protein=profile.daily_protein_goal,
            goal_carbs=profile.daily_carbs_goal,
            goal_fat=profile.daily_fat_goal,
            goal_fiber=profile.daily_fiber_goal,
            goal_sugar=profile.daily_sugar_limit,
            is_on_track=compliance.is_on_track,
            carbs_compliance=compliance.carbs_compliance,
            protein_compliance=compliance.protein_compliance,
            fat_compliance=compliance.fat_compliance,
            diet_type=profile.diet_type,
        )
        self.progress_repository.upsert(record)
        _logger.info(
            "Daily progress updated: user_id=%s date=%s meals=%s on_track=%s",
            user_id,
            today,
            record.meal_count,
            record.is_on_track,
        )
        return record

    def get_progress_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[DailyProgressRecord]:
        """Return stored daily records in the inclusive date range."""
        return self.progress_repository.find_range(user_id, start, end)

    def calculate_weekly_summary(
        self, user_id: UUID, week_start: date
    ) -> WeeklySummary | None:
        """Average the tracked days of the week starting at week_start.

        Returns None when no day of the week has a record.
        """
        week_end = week_start + timedelta(days=DAYS_PER_WEEK - 1)
        days = self.progress_repository.find_range(user_id, week_start, week_end)
        if not days:
            return None

        tracked = len(days)
        on_track = sum(1 for day in days if day.is_on_track)
        return WeeklySummary(
            user_id=user_id,
            week_start=week_start,
            week_end=week_end,
            avg_calories=_average(day.total_calories for day in days),
            avg_protein=_average(day.total_protein for day in days),
            avg_carbs=_average(day.total_carbs for day in days),
            avg_fat=_average(day.total_fat for day in days),
            avg_fiber=_average(day.total_fiber for day in days),
            avg_sugar=_average(day.total_sugar for day in days),
            total_meals=sum(day.meal_count for day in days),
            days_tracked=tracked,
            compliance_rate=on_track / tracked,
        )

    def save_weekly_summary(
        self, user_id: UUID, week_start: date
    ) -> WeeklySummary | None:
        """Compute the weekly summary and store it for monthly reporting."""
        summary = self.calculate_weekly_summary(user_id, week_start)
        if summary is not None:
            self.weekly_repository.upsert(summary)
        return summary

    def get_monthly_summary(
        self, user_id: UUID
    ) -> tuple[list[WeeklySummary], MonthlySummary]:
        """Return recent weekly summaries and their compliance trend."""
        weeks = self.weekly_repository.find_recent(user_id, self.monthly_weeks)
        return weeks, summarize_months(weeks)


def get_week_start(value: date | datetime) -> datetime:
    """Return midnight UTC on the Monday of the week containing value.

    Naive datetimes are treated as UTC. Sunday belongs to the week that
    started six days earlier.
    """
    day = _utc_date(value) if isinstance(value, datetime) else value
    monday = day - timedelta(days=day.weekday())
    return datetime(monday.year, monday.month, monday.day, tzinfo=UTC)


def get_remaining_budget(progress: DailyProgressRecord) -> RemainingBudget:
    """Return what is left of each goal, floored at zero."""
    return RemainingBudget(
        calories=max(0, progress.goal_calories - progress.total_calories),
        protein=max(0, progress.goal_protein - progress.total_protein),
        carbs=max(0, progress.goal_carbs - progress.total_carbs),
        fat=max(0, progress.goal_fat - progress.total_fat),
        fiber=(
            max(0, progress.goal_fiber - progress.total_fiber)
            if progress.goal_fiber is not None
            else None
        ),
        sugar=(
            max(0, progress.goal_sugar - progress.total_sugar)
            if progress.goal_sugar is not None
            else None
        ),
    )


def summarize_months(weeks: list[WeeklySummary]) -> MonthlySummary:
    """Summarize weekly compliance given summaries ordered most recent first.

    The trend compares the last four weeks with the four before them and
    needs at least eight weeks; otherwise it is stable.
    """
    total = len(weeks)
    rates = [week.compliance_rate for week in weeks]
    avg_rate = sum(rates) / total if total else 0.0

    trend = Trend.STABLE
    if total >= TREND_WINDOW_WEEKS * 2:
        recent = sum(rates[:TREND_WINDOW_WEEKS]) / TREND_WINDOW_WEEKS
        previous = (
            sum(rates[TREND_WINDOW_WEEKS : TREND_WINDOW_WEEKS * 2])
            / TREND_WINDOW_WEEKS
        )
        if recent > previous + TREND_THRESHOLD:
            trend = Trend.IMPROVING
        elif recent < previous - TREND_THRESHOLD:
            trend = Trend.DECLINING

    return MonthlySummary(total_weeks=total, avg_compliance_rate=avg_rate, trend=trend)


def sum_meal_totals(meals: list[MealRecord]) -> MacroActuals:
    """Sum meal totals; a meal without fiber or sugar counts as 0."""
    calories = protein = carbs = fat = fiber = sugar = 0.0
    for meal in meals:
        calories += meal.totals.calories
        protein += meal.totals.protein
        carbs += meal.totals.carbs
        fat += meal.totals.fat
        fiber += meal.totals.fiber or 0
        sugar += meal.totals.sugar or 0
    return MacroActuals(
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        sugar=sugar,
    )


def _utc_date(value: datetime) -> date:
    if value.tzinfo is None:
        return value.date()
    return value.astimezone(UTC).date()


def _average(values: Iterable[int]) -> int:
    items = list(values)
    return round_half_up(sum(items) / len(items))
