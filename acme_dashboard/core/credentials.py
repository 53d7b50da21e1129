"""Credential Outcomes — user-facing messages for sign-in failures.

Invariants:
    - CredentialsSignin maps to "Invalid credentials."
    - Every other recognized failure kind maps to "Something went wrong."
    - safe_redirect_target only ever returns a local absolute path

Design Decisions:
    - Unrecognized exceptions are not classified here at all: the authenticator
      lets them propagate (ADR: never mask infrastructure faults as bad passwords)
"""

from acme_dashboard.core.domain_types import AuthFailureKind, DASHBOARD_PATH

INVALID_CREDENTIALS_MESSAGE = "Invalid credentials."
GENERIC_FAILURE_MESSAGE = "Something went wrong."


def describe_auth_failure(kind: str) -> str:
    if kind == AuthFailureKind.CREDENTIALS_SIGNIN.value:
        return INVALID_CREDENTIALS_MESSAGE
    return GENERIC_FAILURE_MESSAGE


def safe_redirect_target(target: str | None, default: str = DASHBOARD_PATH) -> str:
    """Accept only same-origin paths such as '/dashboard/invoices'."""
    if not target or not target.startswith("/") or target.startswith("//"):
        return default
    if "\\" in target:
        return default
    return target
