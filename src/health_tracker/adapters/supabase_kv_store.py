"""Supabase-backed key-value store."""

from dataclasses import dataclass

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from health_tracker.errors import UpstreamFailure
from health_tracker.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Key-value store on a Supabase table with ``key`` and ``value`` columns."""

    client: Client
    table: str = "kv_store"

    def get(self, key: str) -> object | None:
        """Return the JSON value stored under key."""
        try:
            response = (
                self.client.table(self.table)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except (APIError, httpx.HTTPError) as exc:
            raise UpstreamFailure(f"Failed to read {key}") from exc
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Upsert the JSON value under key."""
        try:
            self.client.table(self.table).upsert(
                {"key": key, "value": value}
            ).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise UpstreamFailure(f"Failed to write {key}") from exc

    def delete(self, key: str) -> None:
        """Delete the row for key."""
        try:
            self.client.table(self.table).delete().eq("key", key).execute()
        except (APIError, httpx.HTTPError) as exc:
            raise UpstreamFailure(f"Failed to delete {key}") from exc
