"""Exception types shared by the backend and the sync client."""


class HealthTrackerError(Exception):
    """Base class for application errors."""


class MissingCredentialError(HealthTrackerError):
    """Raised when a request carries no bearer token."""

    def __init__(self, message: str = "No access token provided") -> None:
        super().__init__(message)


class InvalidCredentialError(HealthTrackerError):
    """Raised when a bearer token is rejected or belongs to another user."""

    def __init__(self, message: str = "Invalid access token") -> None:
        super().__init__(message)


class MalformedInputError(HealthTrackerError):
    """Raised when a required field is missing or not acceptable."""


class UpstreamFailure(HealthTrackerError):
    """Raised when storage, the identity provider, or the remote API fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
