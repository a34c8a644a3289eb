"""In-session store of logged entries."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from typing import Generic, Protocol, TypeVar
from uuid import uuid4

from health_tracker.domain.entries import (
    EntrySnapshot,
    FoodDraft,
    FoodEntry,
    HydrationDraft,
    HydrationEntry,
    Supplement,
    SupplementDraft,
)
from health_tracker.domain.goals import Goals


class _Identified(Protocol):
    id: str


R = TypeVar("R", bound=_Identified)


def new_entry_id() -> str:
    """Return a fresh collision-free entry id."""
    return uuid4().hex


@dataclass
class _Collection(Generic[R]):
    """Ordered records addressed by id."""

    records: list[R] = field(default_factory=list)

    def put(self, record: R) -> R:
        for index, existing in enumerate(self.records):
            if existing.id == record.id:
                self.records[index] = record
                return record
        self.records.append(record)
        return record

    def get(self, record_id: str) -> R | None:
        return next((item for item in self.records if item.id == record_id), None)

    def remove(self, record_id: str) -> None:
        self.records = [item for item in self.records if item.id != record_id]

    def reset(self, records: Iterable[R]) -> None:
        self.records = list(records)


class EntryStore:
    """Single-writer owner of one user's session collections.

    Mutations replace records rather than editing them. Removing or toggling
    an unknown id is a no-op.
    """

    def __init__(
        self,
        goals: Goals | None = None,
        id_factory: Callable[[], str] = new_entry_id,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.goals = goals or Goals()
        self._id_factory = id_factory
        self._clock = clock or (lambda: datetime.now(tz=UTC))
        self._foods: _Collection[FoodEntry] = _Collection()
        self._supplements: _Collection[Supplement] = _Collection()
        self._hydration: _Collection[HydrationEntry] = _Collection()

    @property
    def foods(self) -> list[FoodEntry]:
        return list(self._foods.records)

    @property
    def supplements(self) -> list[Supplement]:
        return list(self._supplements.records)

    @property
    def hydration(self) -> list[HydrationEntry]:
        return list(self._hydration.records)

    def snapshot(self) -> EntrySnapshot:
        """Return an immutable copy of all collections."""
        return EntrySnapshot(
            foods=tuple(self._foods.records),
            supplements=tuple(self._supplements.records),
            hydration=tuple(self._hydration.records),
        )

    def replace_all(
        self,
        foods: Iterable[FoodEntry] | None = None,
        supplements: Iterable[Supplement] | None = None,
        hydration: Iterable[HydrationEntry] | None = None,
    ) -> None:
        """Replace whole collections, leaving omitted ones untouched."""
        if foods is not None:
            self._foods.reset(foods)
        if supplements is not None:
            self._supplements.reset(supplements)
        if hydration is not None:
            self._hydration.reset(hydration)

    def set_goals(self, goals: Goals) -> None:
        self.goals = goals

    def add_food(self, draft: FoodDraft) -> FoodEntry:
        """Create a food entry with a fresh id and append it."""
        entry = FoodEntry(
            id=self._id_factory(),
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
            meal=draft.meal,
            timestamp=self._clock(),
        )
        return self._foods.put(entry)

    def put_food(self, entry: FoodEntry) -> FoodEntry:
        return self._foods.put(entry)

    def remove_food(self, entry_id: str) -> None:
        self._foods.remove(entry_id)

    def add_supplement(self, draft: SupplementDraft) -> Supplement:
        """Create a not-yet-taken supplement with a fresh id and append it."""
        supplement = Supplement(
            id=self._id_factory(),
            name=draft.name,
            dosage=draft.dosage,
            frequency=draft.frequency,
            time_of_day=draft.time_of_day,
            taken=False,
            timestamp=self._clock(),
        )
        return self._supplements.put(supplement)

    def put_supplement(self, supplement: Supplement) -> Supplement:
        return self._supplements.put(supplement)

    def get_supplement(self, supplement_id: str) -> Supplement | None:
        return self._supplements.get(supplement_id)

    def remove_supplement(self, supplement_id: str) -> None:
        self._supplements.remove(supplement_id)

    def toggle_supplement(
        self, supplement_id: str, now: datetime | None = None
    ) -> Supplement | None:
        """Flip a supplement's taken flag.

        Marking it taken stamps ``last_taken``; unmarking keeps the previous
        stamp.
        """
        current = self._supplements.get(supplement_id)
        if current is None:
            return None
        if current.taken:
            toggled = replace(current, taken=False)
        else:
            toggled = replace(current, taken=True, last_taken=now or self._clock())
        return self._supplements.put(toggled)

    def add_hydration(self, draft: HydrationDraft) -> HydrationEntry:
        """Create a drink entry timed now and append it."""
        entry = HydrationEntry(
            id=self._id_factory(),
            amount=draft.amount,
            time=self._clock(),
            type=draft.type,
        )
        return self._hydration.put(entry)

    def put_hydration(self, entry: HydrationEntry) -> HydrationEntry:
        return self._hydration.put(entry)

    def remove_hydration(self, entry_id: str) -> None:
        self._hydration.remove(entry_id)
