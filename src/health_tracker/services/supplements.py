"""Supplement service backed by the key-value store."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from health_tracker.domain.entries import Supplement, SupplementDraft
from health_tracker.domain.serialization import (
    format_timestamp,
    supplement_from_json,
    supplement_to_json,
)
from health_tracker.services.entry_store import new_entry_id
from health_tracker.services.storage import KeyValueStore, kv_key

_logger = logging.getLogger(__name__)


@dataclass
class SupplementService:
    """Service for a user's supplement list."""

    store: KeyValueStore

    def list_supplements(self, user_id: str) -> list[Supplement]:
        """Return all supplements in insertion order."""
        return [supplement_from_json(row) for row in self._load(user_id)]

    def add_supplement(self, user_id: str, draft: SupplementDraft) -> Supplement:
        """Append a supplement that has not been taken yet."""
        supplement = Supplement(
            id=new_entry_id(),
            name=draft.name,
            dosage=draft.dosage,
            frequency=draft.frequency,
            time_of_day=draft.time_of_day,
            taken=False,
            timestamp=datetime.now(tz=UTC),
        )
        rows = self._load(user_id)
        rows.append(supplement_to_json(supplement))
        self.store.set(kv_key("supplements", user_id), rows)
        _logger.info(
            "Supplement added: user_id=%s supplement_id=%s", user_id, supplement.id
        )
        return supplement

    def update_supplement(
        self, user_id: str, supplement_id: str, updates: dict[str, object]
    ) -> None:
        """Merge updates into a supplement.

        When the updates mark it taken, ``lastTaken`` is stamped with the
        current time; otherwise the previous value is kept. Unknown ids are
        ignored.
        """
        rows = self._load(user_id)
        changes = {key: value for key, value in updates.items() if key != "id"}
        updated = []
        for row in rows:
            if row.get("id") == supplement_id:
                last_taken = (
                    format_timestamp(datetime.now(tz=UTC))
                    if changes.get("taken")
                    else row.get("lastTaken")
                )
                row = {**row, **changes, "lastTaken": last_taken}
            updated.append(row)
        self.store.set(kv_key("supplements", user_id), updated)

    def remove_supplement(self, user_id: str, supplement_id: str) -> None:
        """Remove a supplement; unknown ids leave the list unchanged."""
        rows = self._load(user_id)
        kept = [row for row in rows if row.get("id") != supplement_id]
        self.store.set(kv_key("supplements", user_id), kept)

    def _load(self, user_id: str) -> list[dict[str, object]]:
        value = self.store.get(kv_key("supplements", user_id))
        return list(value) if isinstance(value, list) else []
