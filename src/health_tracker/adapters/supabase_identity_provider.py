"""Supabase Auth identity provider."""

import logging
from dataclasses import dataclass

from supabase import AuthError, AuthRetryableError, Client

from health_tracker.errors import MalformedInputError, UpstreamFailure
from health_tracker.services.auth import AuthenticatedUser, IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Identity checks and sign-up through Supabase Auth."""

    client: Client

    def get_user(self, access_token: str) -> AuthenticatedUser | None:
        """Return the user for an access token, or None if it is rejected."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthRetryableError as exc:
            raise UpstreamFailure("Identity provider unavailable") from exc
        except AuthError as exc:
            _logger.info("Access token rejected: %s", exc)
            return None
        user = response.user if response else None
        if user is None or not user.id:
            return None
        return AuthenticatedUser(id=str(user.id), email=user.email)

    def create_user(
        self, email: str, password: str, name: str | None
    ) -> AuthenticatedUser:
        """Create a user with a confirmed email address."""
        try:
            response = self.client.auth.admin.create_user(
                {
                    "email": email,
                    "password": password,
                    "user_metadata": {"name": name or ""},
                    # No mail server is configured, so confirm immediately.
                    "email_confirm": True,
                }
            )
        except AuthRetryableError as exc:
            raise UpstreamFailure("Identity provider unavailable") from exc
        except AuthError as exc:
            raise MalformedInputError(str(exc)) from exc
        return AuthenticatedUser(id=str(response.user.id), email=response.user.email)
