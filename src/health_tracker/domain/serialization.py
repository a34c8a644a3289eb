"""JSON codecs for entry records.

The same camelCase shape is used on the wire and inside the key-value store,
so both the backend services and the remote API client share these helpers.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime

from health_tracker.domain.entries import FoodEntry, HydrationEntry, Supplement
from health_tracker.domain.goals import DEFAULT_HYDRATION_GOAL, Goals
from health_tracker.errors import MalformedInputError


def food_from_json(raw: Mapping[str, object]) -> FoodEntry:
    """Build a food entry from its JSON representation."""
    return FoodEntry(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        calories=int(raw.get("calories") or 0),
        protein=int(raw.get("protein") or 0),
        carbs=int(raw.get("carbs") or 0),
        fat=int(raw.get("fat") or 0),
        meal=str(raw.get("meal") or ""),
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


def food_to_json(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "meal": entry.meal,
        "timestamp": format_timestamp(entry.timestamp),
    }


def supplement_from_json(raw: Mapping[str, object]) -> Supplement:
    """Build a supplement from its JSON representation."""
    time_of_day = raw.get("timeOfDay") or []
    if isinstance(time_of_day, str):
        time_of_day = [time_of_day]
    return Supplement(
        id=str(raw["id"]),
        name=str(raw.get("name", "")),
        dosage=str(raw.get("dosage") or ""),
        frequency=str(raw.get("frequency") or "daily"),
        time_of_day=tuple(str(time) for time in time_of_day),
        taken=bool(raw.get("taken", False)),
        last_taken=parse_timestamp(raw.get("lastTaken")),
        timestamp=parse_timestamp(raw.get("timestamp")),
    )


def supplement_to_json(supplement: Supplement) -> dict[str, object]:
    return {
        "id": supplement.id,
        "name": supplement.name,
        "dosage": supplement.dosage,
        "frequency": supplement.frequency,
        "timeOfDay": list(supplement.time_of_day),
        "taken": supplement.taken,
        "lastTaken": format_timestamp(supplement.last_taken),
        "timestamp": format_timestamp(supplement.timestamp),
    }


def hydration_from_json(raw: Mapping[str, object]) -> HydrationEntry:
    """Build a hydration entry from its JSON representation."""
    time = parse_timestamp(raw.get("time"))
    if time is None:
        raise MalformedInputError(f"Hydration entry {raw.get('id')} has no time")
    return HydrationEntry(
        id=str(raw["id"]),
        amount=float(raw.get("amount") or 0.0),
        time=time,
        type=str(raw.get("type") or "water"),
    )


def hydration_list_from_json(
    rows: Iterable[Mapping[str, object]],
) -> list[HydrationEntry]:
    """Build hydration entries, leaving out rows that carry no time."""
    return [
        hydration_from_json(row) for row in rows if parse_timestamp(row.get("time"))
    ]


def hydration_to_json(entry: HydrationEntry) -> dict[str, object]:
    return {
        "id": entry.id,
        "amount": entry.amount,
        "time": format_timestamp(entry.time),
        "type": entry.type,
    }


def goals_from_json(
    profile: Mapping[str, object], hydration_goal: float | None
) -> Goals:
    """Combine the profile's nutrition goals with the hydration goal."""
    defaults = Goals()
    nutrition = profile.get("nutritionGoals") or {}
    if not isinstance(nutrition, Mapping):
        nutrition = {}
    return Goals(
        calorie_goal=int(nutrition.get("calories", defaults.calorie_goal)),
        protein_goal=int(nutrition.get("protein", defaults.protein_goal)),
        carb_goal=int(nutrition.get("carbs", defaults.carb_goal)),
        fat_goal=int(nutrition.get("fat", defaults.fat_goal)),
        hydration_goal=float(
            hydration_goal if hydration_goal is not None else DEFAULT_HYDRATION_GOAL
        ),
    )


def parse_timestamp(value: object) -> datetime | None:
    """Parse an ISO-8601 timestamp, returning None for empty values."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def format_timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
