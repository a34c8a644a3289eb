"""Goal and progress domain models."""

from dataclasses import dataclass

from health_tracker.domain.entries import FoodEntry, HydrationEntry, Supplement

DEFAULT_HYDRATION_GOAL = 2.5


@dataclass(frozen=True)
class Goals:
    """Per-user daily targets used as progress denominators."""

    calorie_goal: int = 2000
    protein_goal: int = 150
    carb_goal: int = 200
    fat_goal: int = 65
    hydration_goal: float = DEFAULT_HYDRATION_GOAL


@dataclass(frozen=True)
class NutritionTotals:
    """Summed calories and macros."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fat: int = 0


@dataclass(frozen=True)
class Completion:
    """Completion rate of a checklist."""

    rate: float
    is_complete: bool


@dataclass(frozen=True)
class MacroProgress:
    """Current value against a goal for one metric."""

    name: str
    current: float
    goal: float
    percent: float


@dataclass(frozen=True)
class DailyProgress:
    """Aggregated progress for a single day."""

    nutrition: NutritionTotals
    macros: list[MacroProgress]
    meals: dict[str, list[FoodEntry]]
    supplements: Completion
    supplements_taken: int
    supplements_total: int
    supplement_groups: dict[str, list[Supplement]]
    hydration_total: float
    hydration_goal: float
    hydration_percent: float
    hydration_remaining: float
    drinks: int
    drinks_today: list[HydrationEntry]
