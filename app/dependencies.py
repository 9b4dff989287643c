"""FastAPI dependency providers for session resolution, role enforcement,
and request parsing.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from fastapi import Depends, Request
from supabase import Client

from app.core.config import settings
from app.core.constants import MAX_TECHNICIAN_ID
from app.core.exceptions import BadRequest, Forbidden, Unauthorized
from app.db.supabase import get_public_client
from app.models.principal import Principal
from app.services.access import is_admin
from app.services.auth import resolve_principal


# ---------------------------------------------------------------------------
# Session
# ---------------------------------------------------------------------------

def get_session_token(request: Request) -> str | None:
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


def get_current_principal(
    token: str | None = Depends(get_session_token),
    client: Client = Depends(get_public_client),
) -> Principal | None:
    """Principal owning the session cookie, or ``None``."""
    return resolve_principal(client, token)


async def require_principal(
    principal: Principal | None = Depends(get_current_principal),
) -> Principal:
    """Require a valid session; 401 otherwise."""
    if principal is None:
        raise Unauthorized()
    return principal


async def require_admin(
    principal: Principal | None = Depends(get_current_principal),
) -> Principal:
    """Require an administrator; 403 otherwise, session or not."""
    if principal is None or not is_admin(principal):
        raise Forbidden()
    return principal


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------

async def read_json_object(request: Request) -> dict[str, Any]:
    """Decode the body as a JSON object; 400 on anything else."""
    try:
        payload = await request.json()
    except ValueError as exc:
        raise BadRequest("Invalid JSON body") from exc
    if not isinstance(payload, dict):
        raise BadRequest("JSON body must be an object")
    return payload


def parse_technician_id(technician_id: str) -> int:
    """Path id must be a whole number within ``bigint`` range; 400 otherwise.

    Parsed as a ``Decimal`` so ``"7.0"`` is accepted and ids past 2**53
    keep every digit.
    """
    try:
        value = Decimal(technician_id)
    except InvalidOperation as exc:
        raise BadRequest("Invalid id") from exc
    if not value.is_finite() or value != value.to_integral_value():
        raise BadRequest("Invalid id")
    if abs(value) > MAX_TECHNICIAN_ID:
        raise BadRequest("Invalid id")
    return int(value)
