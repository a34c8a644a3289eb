"""Apply user actions remotely, then to the local entry store."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from zoneinfo import ZoneInfo

from health_tracker.adapters.health_api_client import HealthApiClient
from health_tracker.domain.entries import (
    FoodDraft,
    FoodEntry,
    HydrationDraft,
    HydrationEntry,
    Supplement,
    SupplementDraft,
)
from health_tracker.domain.goals import DailyProgress, Goals
from health_tracker.domain.serialization import goals_from_json
from health_tracker.services.entry_store import EntryStore
from health_tracker.services.progress import daily_progress

_logger = logging.getLogger(__name__)


@dataclass
class SyncService:
    """One user's session: each action is one request.

    The store is only changed after the server confirms the request, so a
    failed call leaves local state as it was. Errors propagate unchanged.
    """

    client: HealthApiClient
    store: EntryStore
    user_id: str

    async def refresh(self) -> None:
        """Reload every collection and the goals from the server."""
        foods = await self.client.get_nutrition(self.user_id)
        supplements = await self.client.get_supplements(self.user_id)
        drinks, hydration_goal = await self.client.get_hydration(self.user_id)
        profile = await self.client.get_profile(self.user_id)
        self.store.replace_all(foods=foods, supplements=supplements, hydration=drinks)
        self.store.set_goals(goals_from_json(profile, hydration_goal))
        _logger.info(
            "Session refreshed: user_id=%s foods=%s supplements=%s drinks=%s",
            self.user_id,
            len(foods),
            len(supplements),
            len(drinks),
        )

    def progress(self, day: date, tz: ZoneInfo) -> DailyProgress:
        """Aggregate the current session for ``day``."""
        return daily_progress(self.store.snapshot(), self.store.goals, day, tz)

    async def add_food(self, draft: FoodDraft) -> FoodEntry:
        entry = await self.client.add_nutrition(self.user_id, draft)
        return self.store.put_food(entry)

    async def remove_food(self, entry_id: str) -> None:
        await self.client.delete_nutrition(self.user_id, entry_id)
        self.store.remove_food(entry_id)

    async def add_supplement(self, draft: SupplementDraft) -> Supplement:
        supplement = await self.client.add_supplement(self.user_id, draft)
        return self.store.put_supplement(supplement)

    async def toggle_supplement(self, supplement_id: str) -> Supplement | None:
        """Flip a supplement's taken flag on the server, then locally."""
        current = self.store.get_supplement(supplement_id)
        if current is None:
            return None
        await self.client.update_supplement(
            self.user_id, supplement_id, {"taken": not current.taken}
        )
        return self.store.toggle_supplement(supplement_id)

    async def remove_supplement(self, supplement_id: str) -> None:
        await self.client.delete_supplement(self.user_id, supplement_id)
        self.store.remove_supplement(supplement_id)

    async def add_hydration(self, draft: HydrationDraft) -> HydrationEntry:
        entry = await self.client.add_hydration(self.user_id, draft)
        return self.store.put_hydration(entry)

    async def remove_hydration(self, entry_id: str) -> None:
        await self.client.delete_hydration(self.user_id, entry_id)
        self.store.remove_hydration(entry_id)

    async def update_hydration_goal(self, goal: float) -> None:
        await self.client.update_hydration_goal(self.user_id, goal)
        self.store.set_goals(replace(self.store.goals, hydration_goal=goal))

    async def update_nutrition_goals(self, goals: Goals) -> None:
        """Persist calorie and macro goals to the profile."""
        await self.client.update_profile(
            self.user_id,
            {
                "nutritionGoals": {
                    "calories": goals.calorie_goal,
                    "protein": goals.protein_goal,
                    "carbs": goals.carb_goal,
                    "fat": goals.fat_goal,
                }
            },
        )
        self.store.set_goals(
            replace(goals, hydration_goal=self.store.goals.hydration_goal)
        )
