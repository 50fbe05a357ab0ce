"""Progress API endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from nutrition_progress.api.auth import current_user_id
from nutrition_progress.domain.diets import lookup, serialize_template
from nutrition_progress.services.compliance import next_meal_suggestions
from nutrition_progress.services.ketosis import net_carbs
from nutrition_progress.services.progress import get_remaining_budget, get_week_start

if TYPE_CHECKING:
    from nutrition_progress.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/progress", tags=["progress"])

_EMPTY_WEEK = {
    "avg_calories": 0,
    "avg_protein": 0,
    "avg_carbs": 0,
    "avg_fat": 0,
    "avg_fiber": 0,
    "avg_sugar": 0,
    "total_meals": 0,
    "days_tracked": 0,
    "compliance_rate": 0,
}


def setup_required() -> JSONResponse:
    """Response for users who have not created a profile yet."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "Profile not set up", "needsSetup": True},
    )


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
    )


@router.get("/today", response_model=None)
async def progress_today(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Recompute today's progress and suggest the next meal."""
    container: AppContainer = request.app.state.container
    try:
        profile = container.profile_service.get_profile(user_id)
        if profile is None:
            return setup_required()
        progress = container.progress_service.update_daily_progress(user_id)
        if progress is None:
            return setup_required()

        remaining = get_remaining_budget(progress)
        suggestions = next_meal_suggestions(
            remaining.calories,
            remaining.protein,
            remaining.carbs,
            remaining.fat,
            profile.diet_type,
        )
        keto_net_carbs = (
            net_carbs(progress.total_carbs, progress.total_fiber)
            if profile.diet_type == "keto"
            else None
        )
    except Exception:
        logger.exception("Failed to calculate progress", extra={"user_id": user_id})
        return _server_error("Failed to calculate progress")

    return {
        "progress": {**asdict(progress), "net_carbs": keto_net_carbs},
        "remaining": asdict(remaining),
        "suggestions": suggestions,
        "diet_type": profile.diet_type,
        "template": serialize_template(lookup(profile.diet_type)),
    }


@router.get("/week", response_model=None)
async def progress_week(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Return this week's daily records and their summary."""
    container: AppContainer = request.app.state.container
    try:
        profile = container.profile_service.get_profile(user_id)
        if profile is None:
            return setup_required()

        week_start = get_week_start(container.clock.now()).date()
        week_end = week_start + timedelta(days=6)
        days = container.progress_service.get_progress_range(
            user_id, week_start, week_end
        )
        summary = container.progress_service.save_weekly_summary(user_id, week_start)
    except Exception:
        logger.exception("Failed to fetch week progress", extra={"user_id": user_id})
        return _server_error("Failed to fetch week progress")

    return {
        "week_start": week_start.isoformat(),
        "week_end": week_end.isoformat(),
        "days": [asdict(day) for day in sorted(days, key=lambda day: day.date)],
        "summary": asdict(summary) if summary else dict(_EMPTY_WEEK),
        "diet_type": profile.diet_type,
    }


@router.get("/monthly", response_model=None)
async def progress_monthly(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Return recent weekly summaries with the compliance trend."""
    container: AppContainer = request.app.state.container
    try:
        profile = container.profile_service.get_profile(user_id)
        if profile is None:
            return setup_required()
        weeks, summary = container.progress_service.get_monthly_summary(user_id)
    except Exception:
        logger.exception(
            "Failed to fetch monthly progress", extra={"user_id": user_id}
        )
        return _server_error("Failed to fetch monthly progress")

    return {
        "weeks": [asdict(week) for week in weeks],
        "summary": {
            "total_weeks": summary.total_weeks,
            "avg_compliance_rate": summary.avg_compliance_rate,
            "trend": summary.trend.value,
        },
        "diet_type": profile.diet_type,
    }


@router.get("/range", response_model=None)
async def progress_range(
    request: Request,
    start: str | None = None,
    end: str | None = None,
    user_id: UUID = Depends(current_user_id),
) -> dict[str, object] | JSONResponse:
    """Return stored daily records between two dates, inclusive."""
    container: AppContainer = request.app.state.container
    if not start or not end:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Start and end dates required"},
        )
    start_date = _parse_query_date(start)
    end_date = _parse_query_date(end)
    if start_date is None or end_date is None:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid date format"},
        )

    try:
        profile = container.profile_service.get_profile(user_id)
        if profile is None:
            return setup_required()
        days = container.progress_service.get_progress_range(
            user_id, start_date, end_date
        )
    except Exception:
        logger.exception("Failed to fetch progress range", extra={"user_id": user_id})
        return _server_error("Failed to fetch progress range")

    return {"days": [asdict(day) for day in days]}


def _parse_query_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None
