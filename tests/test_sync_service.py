"""Tests for the session sync service."""

import asyncio
import itertools
from dataclasses import dataclass, field
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from health_tracker.domain.entries import (
    FoodDraft,
    FoodEntry,
    HydrationDraft,
    HydrationEntry,
    Supplement,
    SupplementDraft,
)
from health_tracker.domain.goals import Goals
from health_tracker.errors import UpstreamFailure
from health_tracker.services.entry_store import EntryStore
from health_tracker.services.sync import SyncService

NOW = datetime(2024, 5, 10, 9, 0, tzinfo=UTC)


def _food(entry_id: str, name: str, calories: int, meal: str) -> FoodEntry:
    return FoodEntry(
        id=entry_id,
        name=name,
        calories=calories,
        protein=0,
        carbs=0,
        fat=0,
        meal=meal,
        timestamp=NOW,
    )


def _supplement(
    supplement_id: str, name: str, time_of_day: tuple[str, ...]
) -> Supplement:
    return Supplement(
        id=supplement_id,
        name=name,
        dosage="",
        frequency="daily",
        time_of_day=time_of_day,
    )


@dataclass
class FakeHealthApiClient:
    """Records calls and optionally fails them."""

    fail: bool = False
    calls: list[tuple[str, object]] = field(default_factory=list)
    ids: itertools.count = field(default_factory=lambda: itertools.count(1))

    def _record(self, name: str, payload: object = None) -> None:
        self.calls.append((name, payload))
        if self.fail:
            raise UpstreamFailure("Unauthorized", status_code=401)

    async def get_nutrition(self, user_id: str) -> list[FoodEntry]:
        self._record("get_nutrition")
        return [_food("f1", "Oats", 300, "breakfast")]

    async def add_nutrition(self, user_id: str, draft: FoodDraft) -> FoodEntry:
        self._record("add_nutrition", draft)
        return _food(f"f{next(self.ids)}", draft.name, draft.calories, draft.meal)

    async def delete_nutrition(self, user_id: str, entry_id: str) -> bool:
        self._record("delete_nutrition", entry_id)
        return True

    async def get_supplements(self, user_id: str) -> list[Supplement]:
        self._record("get_supplements")
        return [_supplement("s1", "Zinc", ("morning",))]

    async def add_supplement(
        self, user_id: str, draft: SupplementDraft
    ) -> Supplement:
        self._record("add_supplement", draft)
        return _supplement(f"s{next(self.ids)}", draft.name, draft.time_of_day)

    async def update_supplement(
        self, user_id: str, supplement_id: str, updates: dict[str, object]
    ) -> bool:
        self._record("update_supplement", updates)
        return True

    async def delete_supplement(self, user_id: str, supplement_id: str) -> bool:
        self._record("delete_supplement", supplement_id)
        return True

    async def get_hydration(self, user_id: str) -> tuple[list[HydrationEntry], float]:
        self._record("get_hydration")
        return [HydrationEntry(id="h1", amount=0.5, time=NOW)], 3.0

    async def add_hydration(
        self, user_id: str, draft: HydrationDraft
    ) -> HydrationEntry:
        self._record("add_hydration", draft)
        return HydrationEntry(
            id=f"h{next(self.ids)}", amount=draft.amount, time=NOW, type=draft.type
        )

    async def update_hydration_goal(self, user_id: str, goal: float) -> bool:
        self._record("update_hydration_goal", goal)
        return True

    async def delete_hydration(self, user_id: str, entry_id: str) -> bool:
        self._record("delete_hydration", entry_id)
        return True

    async def get_profile(self, user_id: str) -> dict[str, object]:
        self._record("get_profile")
        return {"nutritionGoals": {"calories": 1800, "protein": 120}}

    async def update_profile(self, user_id: str, updates: dict[str, object]) -> bool:
        self._record("update_profile", updates)
        return True


def _session(client: FakeHealthApiClient) -> SyncService:
    return SyncService(client=client, store=EntryStore(), user_id="u1")


def test_refresh_loads_collections_and_goals() -> None:
    session = _session(FakeHealthApiClient())

    asyncio.run(session.refresh())

    assert [food.id for food in session.store.foods] == ["f1"]
    assert [item.id for item in session.store.supplements] == ["s1"]
    assert session.store.goals.calorie_goal == 1800
    assert session.store.goals.fat_goal == 65
    assert session.store.goals.hydration_goal == 3.0


def test_confirmed_actions_update_store() -> None:
    client = FakeHealthApiClient()
    session = _session(client)

    food = asyncio.run(session.add_food(FoodDraft(name="Salad", calories=450)))
    drink = asyncio.run(session.add_hydration(HydrationDraft(amount=0.25)))
    asyncio.run(session.remove_food(food.id))

    assert session.store.foods == []
    assert session.store.hydration == [drink]
    assert [name for name, _ in client.calls] == [
        "add_nutrition",
        "add_hydration",
        "delete_nutrition",
    ]


def test_failed_actions_leave_store_unchanged() -> None:
    client = FakeHealthApiClient()
    session = _session(client)
    asyncio.run(session.refresh())
    before = session.store.snapshot()
    goals_before = session.store.goals
    client.fail = True

    with pytest.raises(UpstreamFailure):
        asyncio.run(session.add_food(FoodDraft(name="Salad", calories=450)))
    with pytest.raises(UpstreamFailure):
        asyncio.run(session.remove_hydration("h1"))
    with pytest.raises(UpstreamFailure):
        asyncio.run(session.toggle_supplement("s1"))
    with pytest.raises(UpstreamFailure):
        asyncio.run(session.update_hydration_goal(4.0))

    assert session.store.snapshot() == before
    assert session.store.goals == goals_before


def test_toggle_sends_negated_flag_then_flips_locally() -> None:
    client = FakeHealthApiClient()
    session = _session(client)
    asyncio.run(session.refresh())

    taken = asyncio.run(session.toggle_supplement("s1"))
    untaken = asyncio.run(session.toggle_supplement("s1"))

    assert ("update_supplement", {"taken": True}) in client.calls
    assert ("update_supplement", {"taken": False}) in client.calls
    assert taken is not None
    assert taken.taken is True
    assert untaken is not None
    assert untaken.taken is False
    assert untaken.last_taken == taken.last_taken


def test_toggle_unknown_supplement_skips_request() -> None:
    client = FakeHealthApiClient()
    session = _session(client)

    assert asyncio.run(session.toggle_supplement("missing")) is None
    assert client.calls == []


def test_goal_updates_keep_other_goals() -> None:
    client = FakeHealthApiClient()
    session = _session(client)

    asyncio.run(session.update_hydration_goal(3.5))
    asyncio.run(
        session.update_nutrition_goals(
            Goals(calorie_goal=1800, protein_goal=120, carb_goal=180, fat_goal=60)
        )
    )

    assert session.store.goals.hydration_goal == 3.5
    assert session.store.goals.calorie_goal == 1800
    assert client.calls[-1][1] == {
        "nutritionGoals": {"calories": 1800, "protein": 120, "carbs": 180, "fat": 60}
    }


def test_progress_aggregates_session() -> None:
    session = _session(FakeHealthApiClient())
    asyncio.run(session.refresh())

    progress = session.progress(NOW.date(), ZoneInfo("UTC"))

    assert progress.nutrition.calories == 300
    assert progress.hydration_total == pytest.approx(0.5)
    assert progress.supplements_total == 1
