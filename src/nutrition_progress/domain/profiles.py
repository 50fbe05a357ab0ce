"""User profile domain models."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from nutrition_progress.domain.nutrition import MacroGoals


class Gender(str, Enum):
    """Gender used by the BMR formula."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(str, Enum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


@dataclass(frozen=True)
class UserProfile:
    """Diet choice, daily goals and optional body metrics for a user."""

    user_id: UUID
    diet_type: str
    daily_calorie_goal: float
    daily_protein_goal: float
    daily_carbs_goal: float
    daily_fat_goal: float
    daily_fiber_goal: float | None = None
    daily_sugar_limit: float | None = None
    weight_kg: float | None = None
    height_cm: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: str | None = None
    dietary_restrictions: tuple[str, ...] = field(default_factory=tuple)

    def goals(self) -> MacroGoals:
        """Return the stored goals as a value object."""
        return MacroGoals(
            calories=self.daily_calorie_goal,
            protein=self.daily_protein_goal,
            carbs=self.daily_carbs_goal,
            fat=self.daily_fat_goal,
            fiber=self.daily_fiber_goal or None,
            sugar=self.daily_sugar_limit or None,
        )
