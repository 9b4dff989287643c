"""Page-navigation gate.

Unauthenticated navigation is sent to the login page and authenticated
visits to the login page are sent home.  Session presence is judged from
the cookie alone; API routes are exempt and authenticate themselves.
"""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response

from app.core.config import settings
from app.core.constants import GATE_BYPASS_PREFIXES

HOME_PATH = "/"


def is_bypassed(path: str) -> bool:
    """True when *path* is, or sits under, one of the exempt prefixes."""
    return any(
        path == prefix or path.startswith(prefix + "/")
        for prefix in GATE_BYPASS_PREFIXES
    )


def gate_redirect(
    path: str,
    has_session: bool,
    login_path: str | None = None,
) -> str | None:
    """Return the path to redirect to, or ``None`` to let the request through."""
    if is_bypassed(path):
        return None

    login_path = login_path or settings.LOGIN_PATH
    is_login_path = path == login_path

    if not has_session and not is_login_path:
        return login_path
    if has_session and is_login_path:
        return HOME_PATH
    return None


class SessionGateMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        has_session = bool(request.cookies.get(settings.SESSION_COOKIE_NAME))
        target = gate_redirect(request.url.path, has_session)
        if target is not None:
            return RedirectResponse(
                url=str(request.url.replace(path=target, query="")),
                status_code=307,
            )
        return await call_next(request)
