"""FastAPI application entry point.

Configures CORS, the session gate, structured logging, lifespan events
(Supabase client construction), and router registration.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.supabase import create_clients
from app.middleware.session_gate import SessionGateMiddleware
from app.routers import admin, auth, health, search

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: build the store clients once per process."""
    setup_logging()
    application.state.supabase = create_clients(settings)
    logger.info("Application starting up")
    yield
    logger.info("Application shutting down")


app = FastAPI(
    title="Technician Directory API",
    description="Recherche de contacts techniques par code et administration de l'annuaire",
    version="0.1.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# Middleware (last added runs first)
# ---------------------------------------------------------------------------
app.add_middleware(SessionGateMiddleware)

_raw_origins = settings.ALLOWED_ORIGINS.strip()
if _raw_origins == "*":
    _allowed_origins: list[str] = ["*"]
else:
    _allowed_origins = [o.strip() for o in _raw_origins.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Router Registration
# ---------------------------------------------------------------------------
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(search.router, prefix="/api", tags=["Search"])
app.include_router(admin.router, prefix="/api/admin/techniciens", tags=["Admin"])


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
