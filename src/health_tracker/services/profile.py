"""Profile and goal configuration service."""

from dataclasses import dataclass

from health_tracker.domain.goals import Goals
from health_tracker.domain.serialization import goals_from_json
from health_tracker.services.hydration import HydrationService
from health_tracker.services.storage import KeyValueStore, kv_key


def default_nutrition_goals() -> dict[str, int]:
    defaults = Goals()
    return {
        "calories": defaults.calorie_goal,
        "protein": defaults.protein_goal,
        "carbs": defaults.carb_goal,
        "fat": defaults.fat_goal,
    }


@dataclass
class ProfileService:
    """Service for the per-user profile blob."""

    store: KeyValueStore
    hydration_service: HydrationService

    def get_profile(self, user_id: str) -> dict[str, object]:
        """Return the stored profile, filling in default nutrition goals."""
        value = self.store.get(kv_key("profile", user_id))
        profile = dict(value) if isinstance(value, dict) else {}
        profile.setdefault("nutritionGoals", default_nutrition_goals())
        return profile

    def update_profile(self, user_id: str, updates: dict[str, object]) -> None:
        """Shallow-merge updates into the stored profile."""
        value = self.store.get(kv_key("profile", user_id))
        profile = dict(value) if isinstance(value, dict) else {}
        self.store.set(kv_key("profile", user_id), {**profile, **updates})

    def get_goals(self, user_id: str) -> Goals:
        """Return nutrition and hydration goals for the user."""
        profile = self.get_profile(user_id)
        hydration_goal = self.hydration_service.get_log(user_id).goal
        return goals_from_json(profile, hydration_goal)
