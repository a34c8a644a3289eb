"""Daily dashboard assembly and widget rendering."""

import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from zoneinfo import ZoneInfo

from health_tracker.domain.entries import (
    MEAL_TYPES,
    TIMES_OF_DAY,
    EntrySnapshot,
    FoodEntry,
    HydrationEntry,
    Supplement,
)
from health_tracker.domain.goals import DailyProgress, MacroProgress
from health_tracker.domain.serialization import food_to_json, format_timestamp
from health_tracker.services.hydration import HydrationService
from health_tracker.services.nutrition import NutritionLogService
from health_tracker.services.profile import ProfileService
from health_tracker.services.progress import ANYTIME, daily_progress, sum_nutrition
from health_tracker.services.supplements import SupplementService


@dataclass
class DashboardService:
    """Service combining stored logs into a daily progress view."""

    nutrition_service: NutritionLogService
    supplement_service: SupplementService
    hydration_service: HydrationService
    profile_service: ProfileService

    def get_day(self, user_id: str, day: date, timezone_name: str) -> DailyProgress:
        """Return aggregated progress for ``day`` in the user's timezone."""
        snapshot = EntrySnapshot(
            foods=tuple(self.nutrition_service.list_entries(user_id)),
            supplements=tuple(self.supplement_service.list_supplements(user_id)),
            hydration=tuple(self.hydration_service.get_log(user_id).entries),
        )
        goals = self.profile_service.get_goals(user_id)
        return daily_progress(snapshot, goals, day, ZoneInfo(timezone_name))


def render_dashboard(day: date, progress: DailyProgress) -> dict[str, object]:
    """Map daily progress to widget descriptions."""
    return {
        "day": day.isoformat(),
        "nutrition": {
            "totals": {
                "calories": progress.nutrition.calories,
                "protein": progress.nutrition.protein,
                "carbs": progress.nutrition.carbs,
                "fat": progress.nutrition.fat,
            },
            "bars": [_progress_bar(macro) for macro in progress.macros],
            "distribution": [
                {"name": "Protein", "value": progress.nutrition.protein},
                {"name": "Carbs", "value": progress.nutrition.carbs},
                {"name": "Fat", "value": progress.nutrition.fat},
            ],
            "meals": _meal_groups(progress.meals),
        },
        "supplements": {
            "taken": progress.supplements_taken,
            "total": progress.supplements_total,
            "percent": _round_percent(progress.supplements.rate),
            "badge": "Complete!" if progress.supplements.is_complete else "In Progress",
            "groups": _supplement_groups(progress.supplement_groups),
        },
        "hydration": {
            "label": (
                f"{_fixed(progress.hydration_total)}L / {progress.hydration_goal:g}L"
            ),
            "total": progress.hydration_total,
            "goal": progress.hydration_goal,
            "percent": _round_percent(progress.hydration_percent),
            "width": min(progress.hydration_percent, 100.0),
            "remaining": round(progress.hydration_remaining, 2),
            "color": _hydration_color(progress.hydration_percent),
            "drinks": progress.drinks,
            "entries": [_drink_item(entry) for entry in progress.drinks_today],
        },
    }


def _progress_bar(macro: MacroProgress) -> dict[str, object]:
    return {
        "name": macro.name,
        "label": f"{macro.current:g}/{macro.goal:g}",
        "current": macro.current,
        "goal": macro.goal,
        "percent": _round_percent(macro.percent),
        "width": min(macro.percent, 100.0),
    }


def _meal_groups(meals: dict[str, list[FoodEntry]]) -> list[dict[str, object]]:
    groups = []
    for meal in _ordered_keys(meals, MEAL_TYPES):
        entries = meals[meal]
        groups.append(
            {
                "meal": meal,
                "calories": sum_nutrition(entries).calories,
                "entries": [food_to_json(entry) for entry in entries],
            }
        )
    return groups


def _supplement_groups(
    groups: dict[str, list[Supplement]],
) -> list[dict[str, object]]:
    return [
        {
            "time": time,
            "items": [
                {
                    "id": item.id,
                    "name": item.name,
                    "dosage": item.dosage,
                    "taken": item.taken,
                }
                for item in groups[time]
            ],
        }
        for time in _ordered_keys(groups, (*TIMES_OF_DAY, ANYTIME))
    ]


def _ordered_keys(groups: dict[str, list], order: tuple[str, ...]) -> list[str]:
    """Known keys in display order, then any others in first-seen order."""
    known = [key for key in order if key in groups]
    return known + [key for key in groups if key not in order]


def _drink_item(entry: HydrationEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "amount": entry.amount,
        "type": entry.type,
        "time": format_timestamp(entry.time),
    }


def _round_percent(value: float) -> int:
    """Round halves up, as the web views do."""
    return math.floor(value + 0.5)


def _fixed(value: float) -> str:
    """One decimal place with halves rounded up on the exact binary value."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _hydration_color(percent: float) -> str:
    if percent >= 100:  # noqa: PLR2004
        return "green"
    if percent >= 75:  # noqa: PLR2004
        return "blue"
    if percent >= 50:  # noqa: PLR2004
        return "yellow"
    return "gray"
