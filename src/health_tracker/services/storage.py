"""Key-value persistence interface."""

from typing import Protocol


class KeyValueStore(Protocol):
    """Persistence interface for JSON blobs addressed by key."""

    def get(self, key: str) -> object | None:
        """Return the stored value, or None when the key is absent."""

    def set(self, key: str, value: object) -> None:
        """Store a value, replacing any previous one."""

    def delete(self, key: str) -> None:
        """Delete a key if present."""


def kv_key(kind: str, user_id: str) -> str:
    """Return the per-user key for a collection kind."""
    return f"{kind}:{user_id}"
