"""Pure aggregation of logged entries into goal progress.

Every function here is side-effect free and never mutates its inputs. Numeric
inputs are trusted: negative or non-finite values are a caller error and are
passed through rather than sanitized.
"""

from collections.abc import Callable, Iterable, Sequence
from datetime import date, datetime
from typing import TypeVar
from zoneinfo import ZoneInfo

from health_tracker.domain.entries import (
    EntrySnapshot,
    FoodEntry,
    HydrationEntry,
    Supplement,
)
from health_tracker.domain.goals import (
    Completion,
    DailyProgress,
    Goals,
    MacroProgress,
    NutritionTotals,
)

T = TypeVar("T")

ANYTIME = "anytime"
UNKNOWN_MEAL = "other"


def sum_nutrition(entries: Iterable[FoodEntry]) -> NutritionTotals:
    """Return element-wise calorie and macro totals across all entries."""
    calories = protein = carbs = fat = 0
    for entry in entries:
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fat += entry.fat
    return NutritionTotals(calories=calories, protein=protein, carbs=carbs, fat=fat)


def progress_percent(current: float, goal: float) -> float:
    """Return current as a percentage of goal.

    A goal that is zero or negative yields 0.0 so callers never see NaN or
    infinity.
    """
    if goal <= 0:
        return 0.0
    return current / goal * 100


def group_by_key(
    entries: Iterable[T], key_fn: Callable[[T], str | None], fallback_key: str
) -> dict[str, list[T]]:
    """Group entries by a single key, keeping first-seen key order."""
    return group_by_keys(entries, lambda entry: [key_fn(entry)], fallback_key)


def group_by_keys(
    entries: Iterable[T],
    keys_fn: Callable[[T], Iterable[str | None] | None],
    fallback_key: str,
) -> dict[str, list[T]]:
    """Group entries under every key they carry.

    An entry with several keys is placed in each of those buckets. Entries
    with no usable key land in ``fallback_key``.
    """
    groups: dict[str, list[T]] = {}
    for entry in entries:
        keys = [key for key in keys_fn(entry) or [] if key]
        for key in dict.fromkeys(keys) or [fallback_key]:
            groups.setdefault(key, []).append(entry)
    return groups


def group_by_meal(entries: Iterable[FoodEntry]) -> dict[str, list[FoodEntry]]:
    return group_by_key(entries, lambda entry: entry.meal, UNKNOWN_MEAL)


def group_by_time_of_day(
    supplements: Iterable[Supplement],
) -> dict[str, list[Supplement]]:
    return group_by_keys(supplements, lambda item: item.time_of_day, ANYTIME)


def completion(taken: int, total: int) -> Completion:
    """Return the completion rate of ``taken`` out of ``total`` items."""
    if total <= 0:
        return Completion(rate=0.0, is_complete=False)
    return Completion(rate=taken / total * 100, is_complete=taken == total)


def supplement_completion(supplements: Sequence[Supplement]) -> Completion:
    """Completion over supplements, counting each supplement once."""
    taken = sum(1 for supplement in supplements if supplement.taken)
    return completion(taken, len(supplements))


def hydration_total(entries: Iterable[HydrationEntry]) -> float:
    """Return the total volume in litres, unrounded."""
    return sum((entry.amount for entry in entries), 0.0)


def hydration_remaining(total: float, goal: float) -> float:
    return max(0.0, goal - total)


def entries_on_day(
    entries: Iterable[T],
    timestamp_fn: Callable[[T], datetime | None],
    day: date,
    tz: ZoneInfo,
) -> list[T]:
    """Return entries whose timestamp falls on ``day`` in ``tz``.

    Entries without a timestamp are left out.
    """
    scoped = []
    for entry in entries:
        moment = timestamp_fn(entry)
        if moment is None:
            continue
        if _aware(moment, tz).astimezone(tz).date() == day:
            scoped.append(entry)
    return scoped


def macro_progress(totals: NutritionTotals, goals: Goals) -> list[MacroProgress]:
    """Return per-metric progress in calories, protein, carbs, fat order."""
    pairs = [
        ("Calories", totals.calories, goals.calorie_goal),
        ("Protein", totals.protein, goals.protein_goal),
        ("Carbs", totals.carbs, goals.carb_goal),
        ("Fat", totals.fat, goals.fat_goal),
    ]
    return [
        MacroProgress(
            name=name,
            current=current,
            goal=goal,
            percent=progress_percent(current, goal),
        )
        for name, current, goal in pairs
    ]


def daily_progress(
    snapshot: EntrySnapshot, goals: Goals, day: date, tz: ZoneInfo
) -> DailyProgress:
    """Aggregate a session snapshot into progress for one day.

    Food and hydration entries are scoped to ``day``; supplements carry their
    own taken flag and are used as-is. Drinks are listed newest first.
    """
    foods = entries_on_day(snapshot.foods, lambda entry: entry.timestamp, day, tz)
    drinks = entries_on_day(snapshot.hydration, lambda entry: entry.time, day, tz)
    supplements = list(snapshot.supplements)

    totals = sum_nutrition(foods)
    water = hydration_total(drinks)
    return DailyProgress(
        nutrition=totals,
        macros=macro_progress(totals, goals),
        meals=group_by_meal(foods),
        supplements=supplement_completion(supplements),
        supplements_taken=sum(1 for item in supplements if item.taken),
        supplements_total=len(supplements),
        supplement_groups=group_by_time_of_day(supplements),
        hydration_total=water,
        hydration_goal=goals.hydration_goal,
        hydration_percent=progress_percent(water, goals.hydration_goal),
        hydration_remaining=hydration_remaining(water, goals.hydration_goal),
        drinks=len(drinks),
        drinks_today=sorted(
            drinks,
            key=lambda entry: _aware(entry.time, tz),
            reverse=True,
        ),
    )


def _aware(moment: datetime, tz: ZoneInfo) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=tz)
