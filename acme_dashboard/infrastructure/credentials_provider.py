"""Credentials Provider — IdentityVerifier that checks email/password against users.

Invariants:
    - Only the "credentials" method is supported; others raise InvalidProvider
    - Malformed credentials, unknown email, and wrong password are indistinguishable
      to the caller: all raise CredentialsSignin
    - Store failures while looking up the user raise CallbackRouteError, chained
      to the original DatabaseError
    - On success, signed_in holds the verified user for the boundary to mint a session

Design Decisions:
    - bcrypt.checkpw for password checks: hashes created with bcrypt.hashpw
    - Request-scoped instance: signed_in is never shared between requests
"""

import logging
from collections.abc import Mapping

import bcrypt
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from acme_dashboard.core.domain_types import AuthFailureKind, UserId
from acme_dashboard.core.errors import AuthenticationError, DatabaseError
from acme_dashboard.infrastructure.database import guard_db_errors
from acme_dashboard.infrastructure.session_tokens import SignedInUser
from acme_dashboard.models.user import User
from acme_dashboard.schemas.auth import SignInForm

logger = logging.getLogger(__name__)

CREDENTIALS_METHOD = "credentials"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


class CredentialsProvider:
    """Verifies submitted credentials against the users table."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self.signed_in: SignedInUser | None = None

    async def verify(
        self, method: str, credentials: Mapping[str, str],
    ) -> None:
        if method != CREDENTIALS_METHOD:
            raise AuthenticationError(AuthFailureKind.INVALID_PROVIDER.value)
        try:
            form = SignInForm.model_validate(dict(credentials))
        except ValidationError:
            raise AuthenticationError(AuthFailureKind.CREDENTIALS_SIGNIN.value)

        try:
            user = await self._find_user(form.email)
        except DatabaseError as e:
            raise AuthenticationError(
                AuthFailureKind.CALLBACK_ROUTE_ERROR.value,
            ) from e

        if user is None or not check_password(form.password, user.password):
            raise AuthenticationError(AuthFailureKind.CREDENTIALS_SIGNIN.value)

        self.signed_in = SignedInUser(
            id=UserId(user.id), email=user.email, name=user.name,
        )
        logger.info(f"User {user.id} signed in")

    async def _find_user(self, email: str) -> User | None:
        async with guard_db_errors(self._db, "query"):
            result = await self._db.execute(
                select(User).where(User.email == email),
            )
            return result.scalar_one_or_none()
