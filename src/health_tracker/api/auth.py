"""Bearer-token guard and sign-up endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request

from health_tracker.api.schemas import SignupRequest  # noqa: TC001
from health_tracker.services.auth import AuthenticatedUser, AuthService

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

router = APIRouter(tags=["auth"])


def _get_auth_service(request: Request) -> AuthService:
    container: AppContainer = request.app.state.container
    return container.auth_service


async def require_user(
    user_id: str,
    authorization: str | None = Header(default=None),
    auth_service: AuthService = Depends(_get_auth_service),
) -> AuthenticatedUser:
    """Ensure the bearer token belongs to the user in the path."""
    return auth_service.authorize(authorization, user_id)


@router.post("/signup")
async def signup(payload: SignupRequest, request: Request) -> dict[str, object]:
    """Create a user account with a confirmed email."""
    container: AppContainer = request.app.state.container
    user = container.auth_service.sign_up(
        payload.email, payload.password, payload.name
    )
    return {"user": {"id": user.id, "email": user.email}}
