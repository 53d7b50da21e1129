"""Authenticate — tests for sign-in outcome classification.

Tests cover:
    - Success returns None and verifies with the "credentials" method
    - CredentialsSignin → "Invalid credentials."
    - Other AuthenticationError kinds → "Something went wrong."
    - Non-authentication exceptions propagate
"""

import pytest
from unittest.mock import AsyncMock

from acme_dashboard.core.errors import AuthenticationError, DatabaseError
from acme_dashboard.services.authenticate import authenticate

CREDENTIALS = {"email": "user@nextmail.com", "password": "123456"}


def _verifier(side_effect=None):
    verifier = AsyncMock()
    verifier.verify = AsyncMock(side_effect=side_effect)
    return verifier


async def test_success_returns_none():
    verifier = _verifier()
    assert await authenticate(verifier, CREDENTIALS) is None
    verifier.verify.assert_awaited_once_with("credentials", CREDENTIALS)


async def test_credentials_signin_is_invalid_credentials():
    verifier = _verifier(AuthenticationError("CredentialsSignin"))
    assert await authenticate(verifier, CREDENTIALS) == "Invalid credentials."


@pytest.mark.parametrize("kind", ["CallbackRouteError", "InvalidProvider", "Configuration"])
async def test_other_auth_failures_are_generic(kind):
    verifier = _verifier(AuthenticationError(kind))
    assert await authenticate(verifier, CREDENTIALS) == "Something went wrong."


async def test_unclassified_errors_propagate():
    verifier = _verifier(ConnectionError("identity backend down"))
    with pytest.raises(ConnectionError):
        await authenticate(verifier, CREDENTIALS)


async def test_database_errors_are_not_masked_as_bad_credentials():
    verifier = _verifier(DatabaseError("Connection or operational error", "query"))
    with pytest.raises(DatabaseError):
        await authenticate(verifier, CREDENTIALS)
