"""HTTP client for the health tracker CRUD API."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from health_tracker.domain.entries import (
    FoodDraft,
    FoodEntry,
    HydrationDraft,
    HydrationEntry,
    Supplement,
    SupplementDraft,
)
from health_tracker.domain.serialization import (
    food_from_json,
    hydration_from_json,
    hydration_list_from_json,
    supplement_from_json,
)
from health_tracker.errors import UpstreamFailure

_logger = logging.getLogger(__name__)


class HealthApiClient(Protocol):
    """Interface for the remote CRUD API."""

    async def get_nutrition(self, user_id: str) -> list[FoodEntry]:
        """Return the user's food entries."""

    async def add_nutrition(self, user_id: str, draft: FoodDraft) -> FoodEntry:
        """Create a food entry and return the stored record."""

    async def delete_nutrition(self, user_id: str, entry_id: str) -> bool:
        """Delete a food entry."""

    async def get_supplements(self, user_id: str) -> list[Supplement]:
        """Return the user's supplements."""

    async def add_supplement(
        self, user_id: str, draft: SupplementDraft
    ) -> Supplement:
        """Create a supplement and return the stored record."""

    async def update_supplement(
        self, user_id: str, supplement_id: str, updates: dict[str, object]
    ) -> bool:
        """Apply updates to a supplement."""

    async def delete_supplement(self, user_id: str, supplement_id: str) -> bool:
        """Delete a supplement."""

    async def get_hydration(self, user_id: str) -> tuple[list[HydrationEntry], float]:
        """Return the user's drinks and hydration goal."""

    async def add_hydration(
        self, user_id: str, draft: HydrationDraft
    ) -> HydrationEntry:
        """Create a drink entry and return the stored record."""

    async def update_hydration_goal(self, user_id: str, goal: float) -> bool:
        """Replace the hydration goal."""

    async def delete_hydration(self, user_id: str, entry_id: str) -> bool:
        """Delete a drink entry."""

    async def get_profile(self, user_id: str) -> dict[str, object]:
        """Return the user's profile."""

    async def update_profile(self, user_id: str, updates: dict[str, object]) -> bool:
        """Merge updates into the user's profile."""


@dataclass
class HttpxHealthApiClient(HealthApiClient):
    """HTTPX-backed client that attaches the user's bearer token."""

    base_url: str
    http_client: httpx.AsyncClient
    access_token: str | None = None

    @classmethod
    def create(
        cls, base_url: str, access_token: str | None = None
    ) -> "HttpxHealthApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            access_token=access_token,
        )

    def set_access_token(self, token: str) -> None:
        self.access_token = token

    async def health_check(self) -> dict[str, object]:
        return await self._request("GET", "/health")

    async def get_nutrition(self, user_id: str) -> list[FoodEntry]:
        data = await self._request("GET", f"/nutrition/{user_id}")
        return [food_from_json(row) for row in data.get("entries", [])]

    async def add_nutrition(self, user_id: str, draft: FoodDraft) -> FoodEntry:
        data = await self._request(
            "POST",
            f"/nutrition/{user_id}",
            json={
                "name": draft.name,
                "calories": draft.calories,
                "protein": draft.protein,
                "carbs": draft.carbs,
                "fat": draft.fat,
                "meal": draft.meal,
            },
        )
        return food_from_json(data["entry"])

    async def delete_nutrition(self, user_id: str, entry_id: str) -> bool:
        data = await self._request("DELETE", f"/nutrition/{user_id}/{entry_id}")
        return bool(data.get("success"))

    async def get_supplements(self, user_id: str) -> list[Supplement]:
        data = await self._request("GET", f"/supplements/{user_id}")
        return [supplement_from_json(row) for row in data.get("supplements", [])]

    async def add_supplement(
        self, user_id: str, draft: SupplementDraft
    ) -> Supplement:
        data = await self._request(
            "POST",
            f"/supplements/{user_id}",
            json={
                "name": draft.name,
                "dosage": draft.dosage,
                "frequency": draft.frequency,
                "timeOfDay": list(draft.time_of_day),
            },
        )
        return supplement_from_json(data["supplement"])

    async def update_supplement(
        self, user_id: str, supplement_id: str, updates: dict[str, object]
    ) -> bool:
        data = await self._request(
            "PUT", f"/supplements/{user_id}/{supplement_id}", json=updates
        )
        return bool(data.get("success"))

    async def delete_supplement(self, user_id: str, supplement_id: str) -> bool:
        data = await self._request("DELETE", f"/supplements/{user_id}/{supplement_id}")
        return bool(data.get("success"))

    async def get_hydration(self, user_id: str) -> tuple[list[HydrationEntry], float]:
        data = await self._request("GET", f"/hydration/{user_id}")
        entries = hydration_list_from_json(data.get("entries", []))
        return entries, float(data["goal"])

    async def add_hydration(
        self, user_id: str, draft: HydrationDraft
    ) -> HydrationEntry:
        data = await self._request(
            "POST",
            f"/hydration/{user_id}",
            json={"amount": draft.amount, "type": draft.type},
        )
        return hydration_from_json(data["entry"])

    async def update_hydration_goal(self, user_id: str, goal: float) -> bool:
        data = await self._request(
            "PUT", f"/hydration/{user_id}/goal", json={"goal": goal}
        )
        return bool(data.get("success"))

    async def delete_hydration(self, user_id: str, entry_id: str) -> bool:
        data = await self._request("DELETE", f"/hydration/{user_id}/{entry_id}")
        return bool(data.get("success"))

    async def get_profile(self, user_id: str) -> dict[str, object]:
        return await self._request("GET", f"/profile/{user_id}")

    async def update_profile(self, user_id: str, updates: dict[str, object]) -> bool:
        data = await self._request("PUT", f"/profile/{user_id}", json=updates)
        return bool(data.get("success"))

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self, method: str, path: str, json: dict[str, object] | None = None
    ) -> dict[str, object]:
        """Send one request and return the decoded body.

        Failures are raised as UpstreamFailure carrying the server's error
        message; nothing is retried.
        """
        headers = {"Content-Type": "application/json"}
        if self.access_token:
            headers["Authorization"] = f"Bearer {self.access_token}"
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers=headers,
                timeout=15,
            )
        except httpx.HTTPError as exc:
            _logger.warning("API request failed for %s: %s", path, exc)
            raise UpstreamFailure(str(exc) or type(exc).__name__) from exc
        try:
            data = response.json()
        except ValueError:
            data = {}
        if response.is_error:
            message = (
                data.get("error") if isinstance(data, dict) else None
            ) or f"HTTP error! status: {response.status_code}"
            _logger.warning("API request failed for %s: %s", path, message)
            raise UpstreamFailure(str(message), status_code=response.status_code)
        return data if isinstance(data, dict) else {}
