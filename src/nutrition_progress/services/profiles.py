"""Profile setup and goal recommendation."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_progress.domain.diets import DEFAULT_DIET_TYPE, DietTemplate, lookup
from nutrition_progress.domain.nutrition import MacroGoals
from nutrition_progress.domain.profiles import UserProfile
from nutrition_progress.services.goals import calculate_goals

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_by_user_id(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user, if present."""

    def save(self, profile: UserProfile) -> UserProfile:
        """Create or replace the profile for profile.user_id."""


@dataclass(frozen=True)
class ProfileChanges:
    """Fields a user may set on their profile; None leaves a field unchanged."""

    diet_type: str | None = None
    daily_calorie_goal: float | None = None
    daily_protein_goal: float | None = None
    daily_carbs_goal: float | None = None
    daily_fat_goal: float | None = None
    daily_fiber_goal: float | None = None
    daily_sugar_limit: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = None
    dietary_restrictions: tuple[str, ...] | None = None


@dataclass
class ProfileService:
    """Application service for user profiles."""

    repository: ProfileRepository

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the user's profile or None if setup is still required."""
        return self.repository.get_by_user_id(user_id)

    def save_profile(self, user_id: UUID, changes: ProfileChanges) -> UserProfile:
        """Create or update a profile.

        Each goal takes the first value present among the explicit change,
        goals computed from body metrics in the change, the existing profile
        and the template baseline.
        """
        existing = self.repository.get_by_user_id(user_id)
        diet_type = changes.diet_type or (
            existing.diet_type if existing else DEFAULT_DIET_TYPE
        )
        template = lookup(diet_type)

        computed: MacroGoals | None = None
        if (
            changes.weight_kg
            and changes.height_cm
            and changes.age
            and changes.gender
            and changes.activity_level
        ):
            computed = calculate_goals(
                changes.weight_kg,
                changes.height_cm,
                changes.age,
                changes.gender,
                changes.activity_level,
                template,
            )

        profile = UserProfile(
            user_id=user_id,
            diet_type=diet_type,
            daily_calorie_goal=_first(
                changes.daily_calorie_goal,
                computed.calories if computed else None,
                existing.daily_calorie_goal if existing else None,
                template.baseline_calories,
            ),
            daily_protein_goal=_first(
                changes.daily_protein_goal,
                computed.protein if computed else None,
                existing.daily_protein_goal if existing else None,
                template.baseline_protein,
            ),
            daily_carbs_goal=_first(
                changes.daily_carbs_goal,
                computed.carbs if computed else None,
                existing.daily_carbs_goal if existing else None,
                template.baseline_carbs,
            ),
            daily_fat_goal=_first(
                changes.daily_fat_goal,
                computed.fat if computed else None,
                existing.daily_fat_goal if existing else None,
                template.baseline_fat,
            ),
            daily_fiber_goal=_first(
                changes.daily_fiber_goal,
                existing.daily_fiber_goal if existing else None,
                template.fiber_minimum,
            ),
            daily_sugar_limit=_first(
                changes.daily_sugar_limit,
                existing.daily_sugar_limit if existing else None,
                template.sugar_maximum,
            ),
            weight_kg=_first(changes.weight_kg, existing.weight_kg if existing else None),
            height_cm=_first(changes.height_cm, existing.height_cm if existing else None),
            age=_first(changes.age, existing.age if existing else None),
            gender=_first(changes.gender, existing.gender if existing else None),
            activity_level=_first(
                changes.activity_level, existing.activity_level if existing else None
            ),
            dietary_restrictions=_first(
                changes.dietary_restrictions,
                existing.dietary_restrictions if existing else None,
                (),
            ),
        )
        saved = self.repository.save(profile)
        _logger.info(
            "Profile saved: user_id=%s diet_type=%s created=%s",
            user_id,
            diet_type,
            existing is None,
        )
        return saved

    def recommend_goals(  # noqa: PLR0913
        self,
        weight_kg: float,
        height_cm: float,
        age: int,
        gender: str,
        activity_level: str,
        diet_type: str,
    ) -> tuple[MacroGoals, DietTemplate]:
        """Return recommended goals without touching the stored profile."""
        template = lookup(diet_type)
        goals = calculate_goals(
            weight_kg, height_cm, age, gender, activity_level, template
        )
        return goals, template


def _first(*values):  # type: ignore[no-untyped-def]
    for value in values:
        if value is not None:
            return value
    return None
