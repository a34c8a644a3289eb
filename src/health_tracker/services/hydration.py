"""Hydration log service backed by the key-value store."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from health_tracker.domain.entries import HydrationDraft, HydrationEntry
from health_tracker.domain.goals import DEFAULT_HYDRATION_GOAL
from health_tracker.domain.serialization import (
    hydration_list_from_json,
    hydration_to_json,
)
from health_tracker.services.entry_store import new_entry_id
from health_tracker.services.storage import KeyValueStore, kv_key

_logger = logging.getLogger(__name__)


@dataclass
class HydrationLog:
    """A user's drinks together with their daily goal."""

    entries: list[HydrationEntry]
    goal: float


@dataclass
class HydrationService:
    """Service for a user's hydration entries and goal."""

    store: KeyValueStore
    default_goal: float = DEFAULT_HYDRATION_GOAL

    def get_log(self, user_id: str) -> HydrationLog:
        """Return stored drinks and the goal, defaulting an empty log."""
        data = self._load(user_id)
        return HydrationLog(
            entries=hydration_list_from_json(data["entries"]),
            goal=float(data["goal"]),
        )

    def add_entry(self, user_id: str, draft: HydrationDraft) -> HydrationEntry:
        """Append a drink timed now."""
        entry = HydrationEntry(
            id=new_entry_id(),
            amount=draft.amount,
            time=datetime.now(tz=UTC),
            type=draft.type,
        )
        data = self._load(user_id)
        data["entries"].append(hydration_to_json(entry))
        self.store.set(kv_key("hydration", user_id), data)
        _logger.info("Drink logged: user_id=%s entry_id=%s", user_id, entry.id)
        return entry

    def set_goal(self, user_id: str, goal: float) -> None:
        """Replace the daily hydration goal in litres."""
        data = self._load(user_id)
        data["goal"] = goal
        self.store.set(kv_key("hydration", user_id), data)

    def remove_entry(self, user_id: str, entry_id: str) -> None:
        """Remove a drink; unknown ids leave the log unchanged."""
        data = self._load(user_id)
        data["entries"] = [row for row in data["entries"] if row.get("id") != entry_id]
        self.store.set(kv_key("hydration", user_id), data)

    def _load(self, user_id: str) -> dict[str, object]:
        value = self.store.get(kv_key("hydration", user_id))
        if not isinstance(value, dict):
            return {"entries": [], "goal": self.default_goal}
        entries = value.get("entries")
        return {
            **value,
            "entries": list(entries) if isinstance(entries, list) else [],
            "goal": value.get("goal", self.default_goal),
        }
