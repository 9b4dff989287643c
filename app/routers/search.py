"""Technician lookup by code.

GET /api/search?code=X -- contact fields of every technician whose code
matches X (case- and whitespace-insensitive), at most 50 rows.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query
from postgrest.exceptions import APIError
from supabase import Client

from app.core.exceptions import BadRequest, ServerError
from app.db.supabase import get_public_client
from app.dependencies import require_principal
from app.models.principal import Principal
from app.models.technician import TechnicianContact
from app.services.technicians import search_by_code

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/search", response_model=list[TechnicianContact])
def search(
    principal: Principal = Depends(require_principal),
    code: str | None = Query(default=None, description="Technician code, e.g. R11A"),
    client: Client = Depends(get_public_client),
) -> list[TechnicianContact]:
    """Return matching contacts.  No match is an empty list, not a 404."""
    if code is None or not code.strip():
        raise BadRequest('Missing "code" query parameter')

    try:
        return search_by_code(client, code)
    except APIError as exc:
        logger.error(
            "technician_search_failed: %s (code=%s)",
            exc.message,
            exc.code,
            extra={"search_code": code, "user_email": principal.email},
        )
        raise ServerError() from exc
