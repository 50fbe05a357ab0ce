"""Profile and diet template endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from nutrition_progress.api.auth import current_user_id, require_api_token
from nutrition_progress.api.models import GoalsRequest, ProfileRequest
from nutrition_progress.domain.diets import list_templates, lookup, serialize_template
from nutrition_progress.services.goals import GoalInputError
from nutrition_progress.services.profiles import ProfileChanges

if TYPE_CHECKING:
    from nutrition_progress.containers import AppContainer

router = APIRouter(prefix="/api", tags=["profile"])


@router.get("/profile", response_model=None)
async def get_profile(
    request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Return the user's profile with a short view of its template."""
    container: AppContainer = request.app.state.container
    profile = container.profile_service.get_profile(user_id)
    if profile is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Profile not found", "needsSetup": True},
        )
    template = lookup(profile.diet_type)
    return {
        "profile": asdict(profile),
        "template": {
            "name": template.name,
            "description": template.description,
            "protein_ratio": template.protein_ratio,
            "carbs_ratio": template.carbs_ratio,
            "fat_ratio": template.fat_ratio,
        },
    }


@router.post("/profile", response_model=None)
async def save_profile(
    body: ProfileRequest, request: Request, user_id: UUID = Depends(current_user_id)
) -> dict[str, object] | JSONResponse:
    """Create or update the user's profile."""
    container: AppContainer = request.app.state.container
    changes = ProfileChanges(
        diet_type=body.diet_type,
        daily_calorie_goal=body.daily_calorie_goal,
        daily_protein_goal=body.daily_protein_goal,
        daily_carbs_goal=body.daily_carbs_goal,
        daily_fat_goal=body.daily_fat_goal,
        daily_fiber_goal=body.daily_fiber_goal,
        daily_sugar_limit=body.daily_sugar_limit,
        weight_kg=body.weight,
        height_cm=body.height,
        age=body.age,
        gender=body.gender.value if body.gender else None,
        activity_level=body.activity_level or None,
        dietary_restrictions=(
            tuple(body.dietary_restrictions)
            if body.dietary_restrictions is not None
            else None
        ),
    )
    try:
        profile = container.profile_service.save_profile(user_id, changes)
    except GoalInputError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )
    template = lookup(profile.diet_type)
    return {
        "profile": asdict(profile),
        "template": {"name": template.name, "description": template.description},
    }


@router.get("/diet-templates")
async def diet_templates() -> dict[str, object]:
    """Return every built-in diet template."""
    return {"templates": [serialize_template(t) for t in list_templates()]}


@router.post(
    "/profile/calculate-goals",
    dependencies=[Depends(require_api_token)],
    response_model=None,
)
async def calculate_goals(
    body: GoalsRequest, request: Request
) -> dict[str, object] | JSONResponse:
    """Recommend goals for body metrics without saving them."""
    container: AppContainer = request.app.state.container
    try:
        goals, template = container.profile_service.recommend_goals(
            weight_kg=body.weight,
            height_cm=body.height,
            age=body.age,
            gender=body.gender.value,
            activity_level=body.activity_level,
            diet_type=body.diet_type,
        )
    except GoalInputError as exc:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": str(exc)}
        )
    return {
        "goals": asdict(goals),
        "template": {"name": template.name, "description": template.description},
    }
