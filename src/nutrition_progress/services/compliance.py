"""Diet compliance scoring and meal suggestions."""

from nutrition_progress.domain.diets import DietTemplate
from nutrition_progress.domain.nutrition import ComplianceResult, MacroActuals, MacroGoals
from nutrition_progress.services.rounding import round_half_up

CALORIES_TOLERANCE = 20
CALORIES_WEIGHT = 0.25
PROTEIN_WEIGHT = 0.25
CARBS_WEIGHT = 0.30
FAT_WEIGHT = 0.20
ON_TRACK_THRESHOLD = 0.7
KETO_FAT_FLOOR = 0.7
FIBER_SHORTFALL = 0.7

SMALL_BUDGET_CALORIES = 200
KETO_CARBS_ALLOWANCE = 10
KETO_FAT_ALLOWANCE = 30
KETO_PROTEIN_ALLOWANCE = 20
VEGAN_PROTEIN_ALLOWANCE = 15
PALEO_CARBS_ALLOWANCE = 30


def single_compliance(actual: float, goal: float, tolerance_percent: float) -> float:
    """Return a 0..1 score for one macro.

    Intake within the tolerance band scores 1. Below the band the score falls
    linearly to 0 at zero intake; above it the score falls linearly with the
    overage.
    """
    if goal == 0:
        return 1.0 if actual == 0 else 0.0

    ratio = actual / goal
    lower = 1 - tolerance_percent / 100
    upper = 1 + tolerance_percent / 100

    if lower <= ratio <= upper:
        return 1.0
    if ratio < lower:
        return max(0.0, ratio / lower)
    return max(0.0, 1 - (ratio - upper) / upper)


def score(
    actual: MacroActuals, goals: MacroGoals, template: DietTemplate
) -> ComplianceResult:
    """Compare a day's intake with goals under a diet template."""
    issues: list[str] = []
    suggestions: list[str] = []
    is_keto = template.diet_type == "keto"

    calories_compliance = single_compliance(
        actual.calories, goals.calories, CALORIES_TOLERANCE
    )
    protein_compliance = single_compliance(
        actual.protein, goals.protein, template.protein_tolerance
    )
    carbs_compliance = single_compliance(
        actual.carbs, goals.carbs, template.carbs_tolerance
    )
    fat_compliance = single_compliance(actual.fat, goals.fat, template.fat_tolerance)

    if actual.carbs > goals.carbs * (1 + template.carbs_tolerance / 100):
        issues.append(_over_goal_issue("Carbs", actual.carbs, goals.carbs))
        if is_keto:
            suggestions.append("Consider reducing carbs to stay in ketosis")
        else:
            suggestions.append("Try swapping some carbs for vegetables or protein")

    if actual.protein < goals.protein * (1 - template.protein_tolerance / 100):
        under = round_half_up((1 - actual.protein / goals.protein) * 100)
        issues.append(f"Protein is {under}% under your goal")
        suggestions.append("Add lean protein like chicken, fish, eggs, or legumes")

    if not is_keto and actual.fat > goals.fat * (1 + template.fat_tolerance / 100):
        issues.append(_over_goal_issue("Fat", actual.fat, goals.fat))
        suggestions.append("Consider reducing cooking oils and fatty meats")

    if is_keto and actual.fat < goals.fat * KETO_FAT_FLOOR:
        issues.append("Fat intake is low for keto")
        suggestions.append("Add healthy fats like avocado, olive oil, or nuts")

    if (
        actual.fiber is not None
        and template.fiber_minimum is not None
        and actual.fiber < template.fiber_minimum * FIBER_SHORTFALL
    ):
        issues.append("Fiber intake is low")
        suggestions.append("Add more vegetables, legumes, or whole grains")

    if (
        actual.sugar is not None
        and template.sugar_maximum is not None
        and actual.sugar > template.sugar_maximum
    ):
        issues.append(f"Sugar is over your {template.sugar_maximum:g}g limit")
        suggestions.append("Reduce sweets, fruits, or sweetened beverages")

    overall = (
        calories_compliance * CALORIES_WEIGHT
        + protein_compliance * PROTEIN_WEIGHT
        + carbs_compliance * CARBS_WEIGHT
        + fat_compliance * FAT_WEIGHT
    )

    return ComplianceResult(
        is_on_track=overall >= ON_TRACK_THRESHOLD and not issues,
        calories_compliance=calories_compliance,
        protein_compliance=protein_compliance,
        carbs_compliance=carbs_compliance,
        fat_compliance=fat_compliance,
        overall_compliance=overall,
        issues=issues,
        suggestions=suggestions,
    )


def next_meal_suggestions(  # noqa: PLR0912
    remaining_calories: float,
    remaining_protein: float,
    remaining_carbs: float,
    remaining_fat: float,
    diet_type: str,
) -> list[str]:
    """Return tips for the next meal given what is left of the daily budget."""
    if remaining_calories < 0:
        return [
            "You've exceeded your daily calorie goal. "
            "Consider a light dinner or skip the snack."
        ]
    if remaining_calories < SMALL_BUDGET_CALORIES:
        return [
            "You have a small calorie budget left. Consider a light snack "
            "like vegetables or a small portion of nuts."
        ]

    suggestions: list[str] = []
    if diet_type == "keto":
        if remaining_carbs > KETO_CARBS_ALLOWANCE:
            suggestions.append(
                "You have some carb allowance left - consider some low-carb vegetables"
            )
        if remaining_fat > KETO_FAT_ALLOWANCE:
            suggestions.append("Add healthy fats: avocado, olive oil, or fatty fish")
        if remaining_protein > KETO_PROTEIN_ALLOWANCE:
            suggestions.append("Good protein options: eggs, chicken, or beef")
    elif diet_type == "vegan":
        if remaining_protein > VEGAN_PROTEIN_ALLOWANCE:
            suggestions.append("Boost protein with: tofu, tempeh, legumes, or seitan")
        suggestions.append("Consider a nutrient-dense meal with quinoa and vegetables")
    elif diet_type == "paleo":
        suggestions.append("Try grilled meat with roasted vegetables")
        if remaining_carbs > PALEO_CARBS_ALLOWANCE:
            suggestions.append("Sweet potatoes or fruits would fit your remaining carbs")
    elif remaining_protein > remaining_carbs and remaining_protein > remaining_fat:
        suggestions.append("Focus on protein: lean meat, fish, eggs, or Greek yogurt")
    elif remaining_carbs > remaining_protein and remaining_carbs > remaining_fat:
        suggestions.append(
            "Good carb options: whole grains, fruits, or starchy vegetables"
        )
    else:
        suggestions.append(
            "A balanced meal with protein, veggies, and complex carbs would be ideal"
        )

    return suggestions


def _over_goal_issue(label: str, actual: float, goal: float) -> str:
    verb = "are" if label == "Carbs" else "is"
    if goal == 0:
        return f"{label} {verb} over your goal"
    percent = round_half_up((actual / goal - 1) * 100)
    return f"{label} {verb} {percent}% over your goal"
