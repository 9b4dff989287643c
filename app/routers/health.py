"""Health check endpoint.

Returns service status including database connectivity.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse
from supabase import Client

from app.core.config import settings
from app.db.supabase import get_public_client

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health_check(client: Client = Depends(get_public_client)) -> Any:
    """Return 200 when a trivial read succeeds, 503 otherwise."""
    db_status = "disconnected"

    try:
        result = client.table(settings.TECHNICIAN_TABLE).select("id").limit(1).execute()
        if result is not None:
            db_status = "connected"
    except Exception:
        logger.warning("Health check: Supabase connection failed", exc_info=True)

    payload: dict[str, str] = {
        "status": "ok" if db_status == "connected" else "degraded",
        "database": db_status,
    }

    if db_status != "connected":
        return JSONResponse(status_code=503, content=payload)

    return payload
