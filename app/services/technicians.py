"""Technician roster operations over the Supabase query builder.

Every function is one store round-trip.  PostgREST failures propagate as
``postgrest.exceptions.APIError`` for the router to log and map; a write
that matches no row raises ``TechnicianNotFoundError``.
"""

from __future__ import annotations

import logging
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from app.core.config import settings
from app.core.constants import (
    ALL_FIELDS,
    CONTACT_FIELDS,
    PGRST_NO_ROWS,
    SEARCH_RESULT_LIMIT,
)
from app.models.technician import (
    Technician,
    TechnicianContact,
    TechnicianCreate,
    TechnicianUpdate,
)

logger = logging.getLogger(__name__)

_ALL_COLUMNS = ", ".join(ALL_FIELDS)
_CONTACT_COLUMNS = ", ".join(CONTACT_FIELDS)


class TechnicianNotFoundError(LookupError):
    """No technician row matched the requested id."""

    def __init__(self, technician_id: int) -> None:
        super().__init__(f"Technician {technician_id} not found")
        self.technician_id = technician_id


def normalize_code(raw: str) -> str:
    """Search-key normalization: trimmed and upper-cased."""
    return raw.strip().upper()


def _first_row(rows: list[dict[str, Any]] | None, technician_id: int) -> dict[str, Any]:
    if not rows:
        raise TechnicianNotFoundError(technician_id)
    return rows[0]


# ---------------------------------------------------------------------------
# Read
# ---------------------------------------------------------------------------

def list_technicians(client: Client) -> list[Technician]:
    """Return every technician.  Order is whatever the store yields."""
    result = client.table(settings.TECHNICIAN_TABLE).select(_ALL_COLUMNS).execute()
    return [Technician(**row) for row in result.data or []]


def search_by_code(client: Client, code: str) -> list[TechnicianContact]:
    """Return up to ``SEARCH_RESULT_LIMIT`` contacts whose code matches."""
    normalized = normalize_code(code)
    result = (
        client.table(settings.TECHNICIAN_TABLE)
        .select(_CONTACT_COLUMNS)
        .eq("code", normalized)
        .limit(SEARCH_RESULT_LIMIT)
        .execute()
    )
    rows = result.data or []
    logger.debug("technician_search", extra={"search_code": normalized, "matches": len(rows)})
    return [TechnicianContact(**row) for row in rows]


# ---------------------------------------------------------------------------
# Write
# ---------------------------------------------------------------------------

def create_technician(client: Client, payload: TechnicianCreate) -> Technician:
    """Insert a technician and return the stored row with its new id."""
    result = (
        client.table(settings.TECHNICIAN_TABLE)
        .insert(payload.changes())
        .execute()
    )
    if not result.data:
        raise APIError({"message": "Insert returned no row", "code": None})
    technician = Technician(**result.data[0])
    logger.info("technician_created", extra={"technician_id": technician.id})
    return technician


def update_technician(
    client: Client, technician_id: int, payload: TechnicianUpdate
) -> Technician:
    """Apply the supplied columns to the row with *technician_id*."""
    result = (
        client.table(settings.TECHNICIAN_TABLE)
        .update(payload.changes())
        .eq("id", technician_id)
        .execute()
    )
    technician = Technician(**_first_row(result.data, technician_id))
    logger.info("technician_updated", extra={"technician_id": technician_id})
    return technician


def delete_technician(client: Client, technician_id: int) -> None:
    """Hard-delete the row with *technician_id*."""
    try:
        result = (
            client.table(settings.TECHNICIAN_TABLE)
            .delete()
            .eq("id", technician_id)
            .execute()
        )
    except APIError as exc:
        if exc.code == PGRST_NO_ROWS:
            raise TechnicianNotFoundError(technician_id) from exc
        raise

    _first_row(result.data, technician_id)
    logger.info("technician_deleted", extra={"technician_id": technician_id})
