"""Auth Routes — credentials sign-in and sign-out.

Invariants:
    - Success: 303 to a same-origin redirectTo (default /dashboard) with a signed
      session cookie (httponly, samesite=lax)
    - Classified failure: 401 {"message": "Invalid credentials." | "Something went wrong."}
    - Unclassified failures propagate to the catch-all handler
    - Sign-out always clears the cookie and returns to /login

Design Decisions:
    - The route mints the session only after authenticate() returned None, so a
      failed sign-in never sets a cookie
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from acme_dashboard.api.dependencies import get_credentials_provider, read_form
from acme_dashboard.config import Settings, get_settings
from acme_dashboard.core.credentials import safe_redirect_target
from acme_dashboard.core.domain_types import LOGIN_PATH
from acme_dashboard.infrastructure.credentials_provider import CredentialsProvider
from acme_dashboard.infrastructure.session_tokens import mint_session_token
from acme_dashboard.services.authenticate import authenticate

logger = logging.getLogger(__name__)
router = APIRouter(tags=["auth"])


@router.post(LOGIN_PATH)
async def login(
    form: dict[str, str] = Depends(read_form),
    provider: CredentialsProvider = Depends(get_credentials_provider),
    settings: Settings = Depends(get_settings),
):
    message = await authenticate(provider, form)
    if message is not None:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": message},
        )

    target = safe_redirect_target(form.get("redirectTo"))
    response = RedirectResponse(target, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        mint_session_token(
            provider.signed_in, settings.auth_secret, settings.session_ttl_minutes,
        ),
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.post("/logout")
async def logout(settings: Settings = Depends(get_settings)):
    response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response
