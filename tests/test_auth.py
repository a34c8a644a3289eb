"""Tests for authentication and sign-up."""

import pytest
from fastapi.testclient import TestClient

from health_tracker.api.app import create_app
from health_tracker.containers import AppContainer
from health_tracker.errors import (
    InvalidCredentialError,
    MalformedInputError,
    MissingCredentialError,
)
from health_tracker.services.auth import AuthService
from tests.conftest import USER_ID, USER_TOKEN, FakeIdentityProvider


@pytest.mark.parametrize("header", [None, "", "Bearer", "Bearer   "])
def test_authenticate_requires_token(header: str | None) -> None:
    service = AuthService(FakeIdentityProvider())

    with pytest.raises(MissingCredentialError):
        service.authenticate(header)


def test_authenticate_resolves_user() -> None:
    service = AuthService(FakeIdentityProvider())

    user = service.authenticate(f"Bearer {USER_TOKEN}")

    assert user.id == USER_ID


def test_authorize_rejects_other_users_path() -> None:
    service = AuthService(FakeIdentityProvider())

    with pytest.raises(InvalidCredentialError):
        service.authorize(f"Bearer {USER_TOKEN}", "someone-else")


def test_sign_up_requires_email_and_password() -> None:
    service = AuthService(FakeIdentityProvider())

    with pytest.raises(MalformedInputError):
        service.sign_up("", "secret", None)


def test_signup_endpoint(container: AppContainer, identity_provider) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        "/signup",
        json={"email": "sam@example.com", "password": "secret", "name": "Sam"},
    )
    duplicate = client.post(
        "/signup", json={"email": "sam@example.com", "password": "secret"}
    )

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "sam@example.com"
    assert identity_provider.created == [{"email": "sam@example.com", "name": "Sam"}]
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "User already registered"}


def test_signup_rejects_missing_password(container: AppContainer) -> None:
    client = TestClient(create_app(container))

    response = client.post("/signup", json={"email": "sam@example.com"})

    assert response.status_code == 400
