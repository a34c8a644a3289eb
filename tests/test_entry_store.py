"""Tests for the in-session entry store."""

import itertools
from dataclasses import replace
from datetime import UTC, datetime

from health_tracker.domain.entries import (
    FoodDraft,
    HydrationDraft,
    SupplementDraft,
)
from health_tracker.services.entry_store import EntryStore

MORNING = datetime(2024, 5, 10, 8, 0, tzinfo=UTC)
EVENING = datetime(2024, 5, 10, 20, 0, tzinfo=UTC)


def _store() -> EntryStore:
    counter = itertools.count(1)
    return EntryStore(id_factory=lambda: str(next(counter)), clock=lambda: MORNING)


def test_add_assigns_unique_ids_and_appends_in_order() -> None:
    store = _store()

    first = store.add_food(FoodDraft(name="Oats", calories=300, meal="breakfast"))
    second = store.add_food(FoodDraft(name="Salad", calories=450, meal="lunch"))

    assert first.id != second.id
    assert [entry.name for entry in store.foods] == ["Oats", "Salad"]
    assert first.timestamp == MORNING


def test_add_supplement_starts_untaken() -> None:
    store = _store()

    supplement = store.add_supplement(
        SupplementDraft(name="Vitamin D3", dosage="2000 IU", time_of_day=("morning",))
    )

    assert supplement.taken is False
    assert supplement.last_taken is None
    assert store.supplements == [supplement]


def test_remove_unknown_id_is_noop() -> None:
    store = _store()
    store.add_food(FoodDraft(name="Oats", calories=300))
    store.add_hydration(HydrationDraft(amount=0.5))
    before = store.snapshot()

    store.remove_food("missing")
    store.remove_supplement("missing")
    store.remove_hydration("missing")

    assert store.snapshot() == before


def test_remove_deletes_matching_record() -> None:
    store = _store()
    kept = store.add_hydration(HydrationDraft(amount=0.5))
    removed = store.add_hydration(HydrationDraft(amount=0.3, type="tea"))

    store.remove_hydration(removed.id)

    assert store.hydration == [kept]


def test_toggle_stamps_last_taken_and_preserves_it_when_untoggled() -> None:
    store = _store()
    supplement = store.add_supplement(SupplementDraft(name="Omega-3"))

    taken = store.toggle_supplement(supplement.id, now=EVENING)
    pending = store.toggle_supplement(supplement.id, now=datetime.now(tz=UTC))

    assert taken is not None
    assert taken.taken is True
    assert taken.last_taken == EVENING
    assert pending is not None
    assert pending.taken is False
    assert pending.last_taken == EVENING


def test_toggle_unknown_id_returns_none() -> None:
    store = _store()

    assert store.toggle_supplement("missing") is None
    assert store.supplements == []


def test_snapshot_is_not_affected_by_later_mutations() -> None:
    store = _store()
    store.add_food(FoodDraft(name="Oats", calories=300))
    snapshot = store.snapshot()

    store.add_food(FoodDraft(name="Salad", calories=450))

    assert len(snapshot.foods) == 1
    assert len(store.foods) == 2


def test_put_replaces_record_with_same_id() -> None:
    store = _store()
    entry = store.add_food(FoodDraft(name="Oats", calories=300))

    store.put_food(replace(entry, calories=350))

    assert [food.calories for food in store.foods] == [350]
