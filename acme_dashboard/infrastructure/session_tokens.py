"""Session Tokens — signed, expiring JWTs carried in the session cookie.

Invariants:
    - Tokens are HS256-signed with settings.auth_secret
    - read_session_token never raises: bad, expired, or tampered tokens read as None

Design Decisions:
    - Stateless JWT over a server-side session table: sign-out is cookie deletion
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from acme_dashboard.core.domain_types import UserId

JWT_ALG = "HS256"


@dataclass(frozen=True)
class SignedInUser:
    id: UserId
    email: str
    name: str


def mint_session_token(
    user: SignedInUser, secret: str, ttl_minutes: int,
) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=ttl_minutes)
    claims = {
        "sub": user.id,
        "email": user.email,
        "name": user.name,
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALG)


def read_session_token(token: str | None, secret: str) -> SignedInUser | None:
    if not token:
        return None
    try:
        payload = jwt.decode(token, secret, algorithms=[JWT_ALG])
    except JWTError:
        return None
    if not payload.get("sub"):
        return None
    return SignedInUser(
        id=UserId(payload["sub"]),
        email=payload.get("email", ""),
        name=payload.get("name", ""),
    )
