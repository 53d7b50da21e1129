"""Authenticate — classify a credentials sign-in attempt into a form message.

Invariants:
    - Success returns None; the caller establishes the session and navigates
    - AuthenticationError kinds map to exactly two messages (core/credentials.py)
    - Any other exception propagates unchanged

Design Decisions:
    - Verifier injected as a Protocol handle: no global auth client
"""

import logging
from collections.abc import Mapping

from acme_dashboard.core.credentials import describe_auth_failure
from acme_dashboard.core.errors import AuthenticationError
from acme_dashboard.core.repository_protocols import IdentityVerifier

logger = logging.getLogger(__name__)


async def authenticate(
    verifier: IdentityVerifier, credentials: Mapping[str, str],
) -> str | None:
    """Return None on success, or the message to show on the login form."""
    try:
        await verifier.verify("credentials", credentials)
    except AuthenticationError as e:
        logger.warning("Sign-in failed", extra={"auth_kind": e.kind})
        return describe_auth_failure(e.kind)
    return None
