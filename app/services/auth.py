"""Session handling against Supabase Auth.

This service never issues or verifies tokens itself.  It only asks the
identity provider who owns a token, exchanges credentials for a session,
and revokes a session on logout.
"""

from __future__ import annotations

import logging

from supabase import AuthError, Client

from app.db.supabase import create_auth_client
from app.models.principal import Principal

logger = logging.getLogger(__name__)


class InvalidCredentialsError(Exception):
    """Raised when the identity provider refuses a password sign-in."""


def resolve_principal(client: Client, token: str | None) -> Principal | None:
    """Return the principal owning *token*, or ``None`` if there is none.

    A token the provider rejects (expired, revoked, malformed) counts as no
    session.
    """
    if not token:
        return None

    try:
        response = client.auth.get_user(token)
    except AuthError as exc:
        logger.debug("session_token_rejected", extra={"error_message": str(exc)})
        return None

    user = getattr(response, "user", None) if response is not None else None
    if user is None:
        return None
    return Principal.from_user(user)


def sign_in(email: str, password: str) -> tuple[Principal, str, int]:
    """Exchange credentials for a session.

    Returns ``(principal, access_token, expires_in)``.  Raises
    ``InvalidCredentialsError`` when the provider refuses the pair.
    """
    client = create_auth_client()
    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
    except AuthError as exc:
        logger.info("sign_in_refused", extra={"error_message": str(exc)})
        raise InvalidCredentialsError() from exc

    if response.session is None or response.user is None:
        raise InvalidCredentialsError()

    return (
        Principal.from_user(response.user),
        response.session.access_token,
        response.session.expires_in,
    )


def revoke_session(client: Client, token: str) -> None:
    """Revoke *token* at the provider using the service client.

    Failures are logged; the caller clears the cookie regardless.
    """
    try:
        client.auth.admin.sign_out(token)
    except AuthError as exc:
        logger.warning("session_revoke_failed", extra={"error_message": str(exc)})
