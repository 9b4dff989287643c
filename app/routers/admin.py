"""Admin CRUD endpoints for the technician roster.

Every route runs ``require_admin`` before anything else and talks to the
store with the service client.  Store errors are logged here with their
PostgREST detail; callers only ever see a generic 500.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Response
from postgrest.exceptions import APIError
from pydantic import ValidationError
from supabase import Client

from app.core.exceptions import NotFound, ServerError, Unprocessable
from app.db.supabase import get_service_client
from app.dependencies import parse_technician_id, read_json_object, require_admin
from app.models.technician import Technician, TechnicianCreate, TechnicianUpdate
from app.services.technicians import (
    TechnicianNotFoundError,
    create_technician,
    delete_technician,
    list_technicians,
    update_technician,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{field}: {error['msg']}" if field else error["msg"])
    return "; ".join(parts)


def _store_failure(event: str, exc: APIError, **context: Any) -> ServerError:
    logger.error("%s: %s (code=%s)", event, exc.message, exc.code, extra=context)
    return ServerError()


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------

@router.get("", response_model=list[Technician])
def list_all(client: Client = Depends(get_service_client)) -> list[Technician]:
    """Return every technician.  No ordering guarantee; sort client-side."""
    try:
        return list_technicians(client)
    except APIError as exc:
        raise _store_failure("list_technicians_failed", exc) from exc


@router.post("", response_model=Technician, status_code=201)
def create(
    payload: dict[str, Any] = Depends(read_json_object),
    client: Client = Depends(get_service_client),
) -> Technician:
    """Insert a technician.  ``code`` and ``name`` are required."""
    try:
        data = TechnicianCreate.model_validate(payload)
    except ValidationError as exc:
        raise Unprocessable(_validation_message(exc)) from exc

    try:
        return create_technician(client, data)
    except APIError as exc:
        raise _store_failure("create_technician_failed", exc) from exc


# ---------------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------------

@router.put("/{technician_id}", response_model=Technician)
def update(
    technician_id: int = Depends(parse_technician_id),
    payload: dict[str, Any] = Depends(read_json_object),
    client: Client = Depends(get_service_client),
) -> Technician:
    """Apply a partial update.  Unknown keys and ``id`` are ignored."""
    try:
        data = TechnicianUpdate.model_validate(payload)
    except ValidationError as exc:
        raise Unprocessable(_validation_message(exc)) from exc

    if not data.changes():
        raise Unprocessable("Nothing to update")

    try:
        return update_technician(client, technician_id, data)
    except TechnicianNotFoundError as exc:
        raise NotFound("Technician not found") from exc
    except APIError as exc:
        raise _store_failure(
            "update_technician_failed", exc, technician_id=technician_id
        ) from exc


@router.delete("/{technician_id}", status_code=204)
def delete(
    technician_id: int = Depends(parse_technician_id),
    client: Client = Depends(get_service_client),
) -> Response:
    """Hard-delete a technician."""
    try:
        delete_technician(client, technician_id)
    except TechnicianNotFoundError as exc:
        raise NotFound("Technician not found") from exc
    except APIError as exc:
        raise _store_failure(
            "delete_technician_failed", exc, technician_id=technician_id
        ) from exc

    return Response(status_code=204)
