"""Session endpoints.

POST /api/auth/login  -- password sign-in, sets the session cookie.
POST /api/auth/logout -- revokes the session and clears the cookie.
GET  /api/auth/me     -- who the current session belongs to.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response
from pydantic import ValidationError
from supabase import Client

from app.core.config import settings
from app.core.exceptions import Unauthorized, Unprocessable
from app.db.supabase import get_service_client
from app.dependencies import get_session_token, read_json_object, require_principal
from app.models.principal import CurrentUser, LoginRequest, Principal
from app.services.access import is_admin
from app.services.auth import InvalidCredentialsError, revoke_session, sign_in

logger = logging.getLogger(__name__)

router = APIRouter()


def _describe(principal: Principal) -> CurrentUser:
    return CurrentUser(
        email=principal.email,
        role=principal.role,
        is_admin=is_admin(principal),
    )


@router.post("/login", response_model=CurrentUser)
def login(
    response: Response,
    payload: dict[str, Any] = Depends(read_json_object),
) -> CurrentUser:
    """Exchange email/password for a session cookie.

    The error never says which of the two was wrong.
    """
    try:
        credentials = LoginRequest.model_validate(payload)
    except ValidationError as exc:
        raise Unprocessable("email and password are required") from exc

    try:
        principal, access_token, expires_in = sign_in(
            credentials.email, credentials.password
        )
    except InvalidCredentialsError as exc:
        raise Unauthorized("Invalid email or password") from exc

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=access_token,
        max_age=expires_in,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    logger.info("user_signed_in", extra={"user_email": principal.email})
    return _describe(principal)


@router.post("/logout", status_code=204)
def logout(
    token: str | None = Depends(get_session_token),
    client: Client = Depends(get_service_client),
) -> Response:
    """Revoke the current session, if any, and clear the cookie."""
    if token:
        revoke_session(client, token)

    response = Response(status_code=204)
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return response


@router.get("/me", response_model=CurrentUser)
async def me(principal: Principal = Depends(require_principal)) -> CurrentUser:
    return _describe(principal)
