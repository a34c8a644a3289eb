"""Food log service backed by the key-value store."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from health_tracker.domain.entries import FoodDraft, FoodEntry
from health_tracker.domain.serialization import food_from_json, food_to_json
from health_tracker.services.entry_store import new_entry_id
from health_tracker.services.storage import KeyValueStore, kv_key

_logger = logging.getLogger(__name__)


@dataclass
class NutritionLogService:
    """Service for a user's food entries."""

    store: KeyValueStore

    def list_entries(self, user_id: str) -> list[FoodEntry]:
        """Return all stored food entries in insertion order."""
        return [food_from_json(row) for row in self._load(user_id)]

    def add_entry(self, user_id: str, draft: FoodDraft) -> FoodEntry:
        """Append an entry with a server-assigned id and timestamp."""
        entry = FoodEntry(
            id=new_entry_id(),
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
            meal=draft.meal,
            timestamp=datetime.now(tz=UTC),
        )
        rows = self._load(user_id)
        rows.append(food_to_json(entry))
        self.store.set(kv_key("nutrition", user_id), rows)
        _logger.info("Food entry added: user_id=%s entry_id=%s", user_id, entry.id)
        return entry

    def remove_entry(self, user_id: str, entry_id: str) -> None:
        """Remove an entry; unknown ids leave the log unchanged."""
        rows = self._load(user_id)
        kept = [row for row in rows if row.get("id") != entry_id]
        self.store.set(kv_key("nutrition", user_id), kept)

    def _load(self, user_id: str) -> list[dict[str, object]]:
        value = self.store.get(kv_key("nutrition", user_id))
        return list(value) if isinstance(value, list) else []
