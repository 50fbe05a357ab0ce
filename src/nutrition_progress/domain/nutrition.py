"""Nutrition value objects shared by scoring and aggregation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MacroActuals:
    """Macronutrient intake in kcal and grams."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None


@dataclass(frozen=True)
class MacroGoals:
    """Daily macronutrient targets in kcal and grams."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None = None
    sugar: float | None = None


@dataclass(frozen=True)
class ComplianceResult:
    """Outcome of comparing daily intake against goals."""

    is_on_track: bool
    calories_compliance: float
    protein_compliance: float
    carbs_compliance: float
    fat_compliance: float
    overall_compliance: float
    issues: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RemainingBudget:
    """What is left of the daily goals, never negative."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float | None
    sugar: float | None
