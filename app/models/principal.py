"""Authenticated identity attached to a request.

Never persisted; rebuilt per request from the identity provider's answer to
"who owns this session token".
"""

from typing import Any

from pydantic import BaseModel


class Principal(BaseModel):
    """Email plus the optional ``app_metadata.role`` claim."""
    email: str = ""
    role: str | None = None

    @classmethod
    def from_user(cls, user: Any) -> "Principal":
        """Build from a Supabase auth ``User``."""
        app_metadata = getattr(user, "app_metadata", None) or {}
        role = app_metadata.get("role")
        return cls(
            email=getattr(user, "email", None) or "",
            role=role if isinstance(role, str) else None,
        )


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""
    email: str
    password: str


class CurrentUser(BaseModel):
    """Response body describing the signed-in principal."""
    email: str
    role: str | None = None
    is_admin: bool
