"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from nutrition_progress.domain.profiles import Gender


class ProfileRequest(BaseModel):
    """Profile create or update payload; omitted fields stay unchanged."""

    diet_type: str | None = None
    daily_calorie_goal: float | None = Field(default=None, ge=0)
    daily_protein_goal: float | None = Field(default=None, ge=0)
    daily_carbs_goal: float | None = Field(default=None, ge=0)
    daily_fat_goal: float | None = Field(default=None, ge=0)
    daily_fiber_goal: float | None = Field(default=None, ge=0)
    daily_sugar_limit: float | None = Field(default=None, ge=0)
    weight: float | None = None
    height: float | None = None
    age: int | None = None
    gender: Gender | None = None
    activity_level: str | None = None
    dietary_restrictions: list[str] | None = None


class GoalsRequest(BaseModel):
    """Body metrics for a goal recommendation."""

    weight: float
    height: float
    age: int
    gender: Gender
    activity_level: str = Field(min_length=1)
    diet_type: str


class KetoneLogRequest(BaseModel):
    """Ketone reading payload."""

    ketone_level: float
    measurement_type: str = "blood"
    notes: str | None = None
