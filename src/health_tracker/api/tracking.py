"""Per-user CRUD endpoints for food, supplements, hydration and profile."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, Request

from health_tracker.api.auth import require_user
from health_tracker.api.schemas import (  # noqa: TC001
    FoodEntryCreate,
    HydrationEntryCreate,
    HydrationGoalUpdate,
    ProfileUpdate,
    SupplementCreate,
    SupplementUpdate,
)
from health_tracker.domain.serialization import (
    food_to_json,
    hydration_to_json,
    supplement_to_json,
)
from health_tracker.errors import MalformedInputError
from health_tracker.services.dashboard import render_dashboard

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(dependencies=[Depends(require_user)])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("/nutrition/{user_id}")
async def list_nutrition(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's food entries."""
    entries = _container(request).nutrition_service.list_entries(user_id)
    return {"entries": [food_to_json(entry) for entry in entries]}


@router.post("/nutrition/{user_id}")
async def add_nutrition(
    user_id: str, payload: FoodEntryCreate, request: Request
) -> dict[str, object]:
    """Log a food entry."""
    entry = _container(request).nutrition_service.add_entry(
        user_id, payload.to_draft()
    )
    return {"entry": food_to_json(entry)}


@router.delete("/nutrition/{user_id}/{entry_id}")
async def delete_nutrition(
    user_id: str, entry_id: str, request: Request
) -> dict[str, object]:
    """Remove a food entry."""
    _container(request).nutrition_service.remove_entry(user_id, entry_id)
    return {"success": True}


@router.get("/supplements/{user_id}")
async def list_supplements(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's supplements."""
    supplements = _container(request).supplement_service.list_supplements(user_id)
    return {"supplements": [supplement_to_json(item) for item in supplements]}


@router.post("/supplements/{user_id}")
async def add_supplement(
    user_id: str, payload: SupplementCreate, request: Request
) -> dict[str, object]:
    """Add a supplement to the user's list."""
    supplement = _container(request).supplement_service.add_supplement(
        user_id, payload.to_draft()
    )
    return {"supplement": supplement_to_json(supplement)}


@router.put("/supplements/{user_id}/{supplement_id}")
async def update_supplement(
    user_id: str, supplement_id: str, payload: SupplementUpdate, request: Request
) -> dict[str, object]:
    """Update a supplement, e.g. mark it taken."""
    _container(request).supplement_service.update_supplement(
        user_id, supplement_id, payload.changes()
    )
    return {"success": True}


@router.delete("/supplements/{user_id}/{supplement_id}")
async def delete_supplement(
    user_id: str, supplement_id: str, request: Request
) -> dict[str, object]:
    """Remove a supplement."""
    _container(request).supplement_service.remove_supplement(user_id, supplement_id)
    return {"success": True}


@router.get("/hydration/{user_id}")
async def get_hydration(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's drinks and hydration goal."""
    log = _container(request).hydration_service.get_log(user_id)
    return {
        "entries": [hydration_to_json(entry) for entry in log.entries],
        "goal": log.goal,
    }


@router.post("/hydration/{user_id}")
async def add_hydration(
    user_id: str, payload: HydrationEntryCreate, request: Request
) -> dict[str, object]:
    """Log a drink."""
    entry = _container(request).hydration_service.add_entry(
        user_id, payload.to_draft()
    )
    return {"entry": hydration_to_json(entry)}


@router.put("/hydration/{user_id}/goal")
async def update_hydration_goal(
    user_id: str, payload: HydrationGoalUpdate, request: Request
) -> dict[str, object]:
    """Replace the daily hydration goal."""
    _container(request).hydration_service.set_goal(user_id, payload.goal)
    return {"success": True}


@router.delete("/hydration/{user_id}/{entry_id}")
async def delete_hydration(
    user_id: str, entry_id: str, request: Request
) -> dict[str, object]:
    """Remove a drink."""
    _container(request).hydration_service.remove_entry(user_id, entry_id)
    return {"success": True}


@router.get("/profile/{user_id}")
async def get_profile(user_id: str, request: Request) -> dict[str, object]:
    """Return the user's profile and nutrition goals."""
    return _container(request).profile_service.get_profile(user_id)


@router.put("/profile/{user_id}")
async def update_profile(
    user_id: str, payload: ProfileUpdate, request: Request
) -> dict[str, object]:
    """Merge fields into the user's profile."""
    _container(request).profile_service.update_profile(user_id, payload.changes())
    return {"success": True}


@router.get("/dashboard/{user_id}")
async def dashboard(
    user_id: str,
    request: Request,
    day: date | None = None,
    timezone: str = "UTC",
) -> dict[str, object]:
    """Return progress widgets for one day, today by default."""
    tz = _parse_timezone(timezone)
    resolved_day = day or datetime.now(tz=tz).date()
    progress = _container(request).dashboard_service.get_day(
        user_id, resolved_day, timezone
    )
    return render_dashboard(resolved_day, progress)


def _parse_timezone(value: str) -> ZoneInfo:
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise MalformedInputError(f"Unknown timezone: {value}") from exc
