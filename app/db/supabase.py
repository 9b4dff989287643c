"""Supabase clients.

Two long-lived clients are built once at startup by ``create_clients()`` and
kept on ``app.state``:

* ``public`` -- anon key, constrained by row-level security.  Used for the
  search lookup and for resolving session tokens.
* ``service`` -- service-role key, bypasses row-level security.  Used only by
  the admin routes and for token revocation.

Handlers receive them through the ``get_public_client`` /
``get_service_client`` dependencies.  Neither client is ever signed in;
password logins go through a throwaway client from ``create_auth_client()``.
"""

from dataclasses import dataclass

from fastapi import Request
from supabase import Client, ClientOptions, create_client

from app.core.config import Settings, settings


@dataclass(frozen=True)
class SupabaseClients:
    public: Client
    service: Client


def _stateless_options() -> ClientOptions:
    return ClientOptions(auto_refresh_token=False, persist_session=False)


def create_clients(config: Settings = settings) -> SupabaseClients:
    """Build the public and service clients from *config*."""
    return SupabaseClients(
        public=create_client(
            config.SUPABASE_URL, config.SUPABASE_ANON_KEY, options=_stateless_options()
        ),
        service=create_client(
            config.SUPABASE_URL, config.SUPABASE_SERVICE_KEY, options=_stateless_options()
        ),
    )


def create_auth_client(config: Settings = settings) -> Client:
    """Return a fresh anon client for a single sign-in exchange."""
    return create_client(
        config.SUPABASE_URL, config.SUPABASE_ANON_KEY, options=_stateless_options()
    )


def get_clients(request: Request) -> SupabaseClients:
    return request.app.state.supabase


def get_public_client(request: Request) -> Client:
    return get_clients(request).public


def get_service_client(request: Request) -> Client:
    return get_clients(request).service
