"""Bearer-token authentication and sign-up."""

import logging
from dataclasses import dataclass
from typing import Protocol

from health_tracker.errors import (
    InvalidCredentialError,
    MalformedInputError,
    MissingCredentialError,
)

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity resolved from an access token."""

    id: str
    email: str | None = None


class IdentityProvider(Protocol):
    """Interface to the external identity provider."""

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Return the user owning the token, or None when it is rejected."""

    def create_user(
        self, email: str, password: str, name: str | None
    ) -> AuthenticatedUser:
        """Create a confirmed user account."""


@dataclass
class AuthService:
    """Service resolving request credentials to users."""

    identity_provider: IdentityProvider

    def authenticate(self, authorization: str | None) -> AuthenticatedUser:
        """Resolve an ``Authorization`` header value to a user."""
        token = _extract_bearer_token(authorization)
        if not token:
            raise MissingCredentialError
        user = self.identity_provider.get_user(token)
        if user is None:
            raise InvalidCredentialError
        return user

    def authorize(self, authorization: str | None, user_id: str) -> AuthenticatedUser:
        """Authenticate and require the token to belong to ``user_id``."""
        user = self.authenticate(authorization)
        if user.id != user_id:
            _logger.warning(
                "Token user does not match path user: token=%s path=%s",
                user.id,
                user_id,
            )
            raise InvalidCredentialError
        return user

    def sign_up(self, email: str, password: str, name: str | None) -> AuthenticatedUser:
        """Create a user account."""
        if not email or not password:
            raise MalformedInputError("Email and password are required")
        return self.identity_provider.create_user(email, password, name)


def _extract_bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    _, _, token = authorization.strip().partition(" ")
    return token.strip() or None
