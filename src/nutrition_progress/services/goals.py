"""Daily goal calculation from body metrics."""

from nutrition_progress.domain.diets import DietTemplate
from nutrition_progress.domain.nutrition import MacroGoals
from nutrition_progress.domain.profiles import ActivityLevel
from nutrition_progress.services.rounding import round_half_up

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = ACTIVITY_MULTIPLIERS[ActivityLevel.MODERATE]

CALORIES_PER_GRAM_PROTEIN = 4
CALORIES_PER_GRAM_CARBS = 4
CALORIES_PER_GRAM_FAT = 9


class GoalInputError(ValueError):
    """Raised when body metrics cannot produce meaningful goals."""


def calculate_bmr(weight_kg: float, height_cm: float, age: float, gender: str) -> float:
    """Return basal metabolic rate using the revised Harris-Benedict equation."""
    if gender == "male":
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age


def calculate_goals(  # noqa: PLR0913
    weight_kg: float,
    height_cm: float,
    age: float,
    gender: str,
    activity_level: str,
    template: DietTemplate,
) -> MacroGoals:
    """Return calorie and macro targets for the body metrics and template.

    Calories are the rounded TDEE. Protein and carbs use 4 kcal/g and fat
    9 kcal/g. Unknown activity levels use the moderate multiplier.

    Raises:
        GoalInputError: if weight, height or age is not positive.
    """
    for name, value in (("weight", weight_kg), ("height", height_cm), ("age", age)):
        if value <= 0:
            raise GoalInputError(f"{name} must be positive, got {value}")

    bmr = calculate_bmr(weight_kg, height_cm, age, gender)
    multiplier = ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_MULTIPLIER)
    tdee = round_half_up(bmr * multiplier)

    return MacroGoals(
        calories=tdee,
        protein=round_half_up(
            tdee * template.protein_ratio / 100 / CALORIES_PER_GRAM_PROTEIN
        ),
        carbs=round_half_up(tdee * template.carbs_ratio / 100 / CALORIES_PER_GRAM_CARBS),
        fat=round_half_up(tdee * template.fat_ratio / 100 / CALORIES_PER_GRAM_FAT),
        fiber=template.fiber_minimum,
        sugar=template.sugar_maximum,
    )
