"""Diet templates and the built-in catalog."""

from dataclasses import dataclass

DEFAULT_DIET_TYPE = "balanced"


@dataclass(frozen=True)
class DietTemplate:
    """Macro-ratio archetype with baseline targets and tolerance bands.

    Ratios are percentages of daily calories. Tolerances are percentage bands
    around a goal inside which intake counts as fully compliant.
    """

    diet_type: str
    name: str
    description: str
    protein_ratio: float
    carbs_ratio: float
    fat_ratio: float
    baseline_calories: float
    baseline_protein: float
    baseline_carbs: float
    baseline_fat: float
    carbs_tolerance: float
    protein_tolerance: float
    fat_tolerance: float
    fiber_minimum: float | None = None
    sugar_maximum: float | None = None


DIET_TEMPLATES: dict[str, DietTemplate] = {
    "keto": DietTemplate(
        diet_type="keto",
        name="Ketogenic",
        description=(
            "High fat, very low carb diet to achieve ketosis. "
            "Ideal for weight loss and blood sugar control."
        ),
        protein_ratio=25,
        carbs_ratio=5,
        fat_ratio=70,
        baseline_calories=2000,
        baseline_protein=125,
        baseline_carbs=25,
        baseline_fat=156,
        carbs_tolerance=20,
        protein_tolerance=30,
        fat_tolerance=30,
        fiber_minimum=20,
        sugar_maximum=10,
    ),
    "paleo": DietTemplate(
        diet_type="paleo",
        name="Paleo",
        description=(
            "Based on foods similar to those eaten during the Paleolithic era. "
            "Focus on whole foods."
        ),
        protein_ratio=30,
        carbs_ratio=40,
        fat_ratio=30,
        baseline_calories=2000,
        baseline_protein=150,
        baseline_carbs=200,
        baseline_fat=67,
        carbs_tolerance=30,
        protein_tolerance=25,
        fat_tolerance=30,
        fiber_minimum=30,
        sugar_maximum=30,
    ),
    "vegan": DietTemplate(
        diet_type="vegan",
        name="Vegan",
        description=(
            "Plant-based diet excluding all animal products. "
            "Focus on protein from legumes, nuts, and grains."
        ),
        protein_ratio=15,
        carbs_ratio=55,
        fat_ratio=30,
        baseline_calories=2000,
        baseline_protein=75,
        baseline_carbs=275,
        baseline_fat=67,
        carbs_tolerance=35,
        protein_tolerance=30,
        fat_tolerance=30,
        fiber_minimum=35,
        sugar_maximum=50,
    ),
    "mediterranean": DietTemplate(
        diet_type="mediterranean",
        name="Mediterranean",
        description=(
            "Heart-healthy diet rich in olive oil, fish, vegetables, "
            "and whole grains."
        ),
        protein_ratio=20,
        carbs_ratio=40,
        fat_ratio=40,
        baseline_calories=2000,
        baseline_protein=100,
        baseline_carbs=200,
        baseline_fat=89,
        carbs_tolerance=30,
        protein_tolerance=30,
        fat_tolerance=30,
        fiber_minimum=30,
        sugar_maximum=40,
    ),
    "lowcarb": DietTemplate(
        diet_type="lowcarb",
        name="Low-Carb",
        description=(
            "Moderate carb restriction for weight management. "
            "More flexible than keto."
        ),
        protein_ratio=30,
        carbs_ratio=20,
        fat_ratio=50,
        baseline_calories=2000,
        baseline_protein=150,
        baseline_carbs=100,
        baseline_fat=111,
        carbs_tolerance=25,
        protein_tolerance=30,
        fat_tolerance=30,
        fiber_minimum=25,
        sugar_maximum=25,
    ),
    "balanced": DietTemplate(
        diet_type="balanced",
        name="Balanced",
        description=(
            "Standard balanced diet following general nutritional guidelines."
        ),
        protein_ratio=20,
        carbs_ratio=50,
        fat_ratio=30,
        baseline_calories=2000,
        baseline_protein=100,
        baseline_carbs=250,
        baseline_fat=67,
        carbs_tolerance=35,
        protein_tolerance=35,
        fat_tolerance=35,
        fiber_minimum=25,
        sugar_maximum=50,
    ),
}


def lookup(diet_type: str | None) -> DietTemplate:
    """Return the template for a diet type, falling back to balanced."""
    if diet_type is None:
        return DIET_TEMPLATES[DEFAULT_DIET_TYPE]
    return DIET_TEMPLATES.get(diet_type, DIET_TEMPLATES[DEFAULT_DIET_TYPE])


def list_templates() -> list[DietTemplate]:
    """Return every built-in template in catalog order."""
    return list(DIET_TEMPLATES.values())


def serialize_template(template: DietTemplate) -> dict[str, object]:
    """Return the public JSON view of a template."""
    return {
        "diet_type": template.diet_type,
        "name": template.name,
        "description": template.description,
        "protein_ratio": template.protein_ratio,
        "carbs_ratio": template.carbs_ratio,
        "fat_ratio": template.fat_ratio,
        "baseline_calories": template.baseline_calories,
        "baseline_protein": template.baseline_protein,
        "baseline_carbs": template.baseline_carbs,
        "baseline_fat": template.baseline_fat,
        "fiber_minimum": template.fiber_minimum,
        "sugar_maximum": template.sugar_maximum,
    }
