"""Domain models for logged health entries and goals."""

from dataclasses import dataclass
from datetime import datetime

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
SUPPLEMENT_FREQUENCIES = ("daily", "weekly", "as-needed")
TIMES_OF_DAY = ("morning", "afternoon", "evening")
DRINK_TYPES = ("water", "coffee", "tea", "juice", "other")


@dataclass(frozen=True)
class FoodEntry:
    """A logged food item with its macros."""

    id: str
    name: str
    calories: int
    protein: int
    carbs: int
    fat: int
    meal: str
    timestamp: datetime | None = None


@dataclass(frozen=True)
class Supplement:
    """A supplement definition and its adherence state."""

    id: str
    name: str
    dosage: str
    frequency: str
    time_of_day: tuple[str, ...]
    taken: bool = False
    last_taken: datetime | None = None
    timestamp: datetime | None = None


@dataclass(frozen=True)
class HydrationEntry:
    """A single logged drink."""

    id: str
    amount: float
    time: datetime
    type: str = "water"


@dataclass(frozen=True)
class FoodDraft:
    """User-submitted food fields before an id is assigned."""

    name: str
    calories: int
    protein: int = 0
    carbs: int = 0
    fat: int = 0
    meal: str = "breakfast"


@dataclass(frozen=True)
class SupplementDraft:
    """User-submitted supplement fields before an id is assigned."""

    name: str
    dosage: str = ""
    frequency: str = "daily"
    time_of_day: tuple[str, ...] = ()


@dataclass(frozen=True)
class HydrationDraft:
    """User-submitted drink fields before an id is assigned."""

    amount: float
    type: str = "water"


@dataclass(frozen=True)
class EntrySnapshot:
    """Immutable view of a session's collections."""

    foods: tuple[FoodEntry, ...] = ()
    supplements: tuple[Supplement, ...] = ()
    hydration: tuple[HydrationEntry, ...] = ()
