"""Action Responses — the boundary adapter that turns ActionResult into HTTP.

Invariants:
    - Redirect → 303 See Other (browser re-requests with GET)
    - FieldErrors → 400 {"errors", "message"}
    - ActionError → 503 {"message"}
    - ActionMessage → 200 {"message"}

Design Decisions:
    - The only place navigation happens: actions return a Redirect value and this
      adapter performs it after the action has fully returned
"""

from fastapi import status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from acme_dashboard.core.action_outcomes import (
    ActionError, ActionResult, FieldErrors, Redirect,
)


def to_response(result: ActionResult) -> Response:
    if isinstance(result, Redirect):
        return RedirectResponse(result.path, status_code=status.HTTP_303_SEE_OTHER)
    if isinstance(result, FieldErrors):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content=result.to_state(),
        )
    if isinstance(result, ActionError):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=result.to_state(),
        )
    return JSONResponse(status_code=status.HTTP_200_OK, content=result.to_state())
