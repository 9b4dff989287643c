"""Administrator predicate.

Pure: depends only on the principal and the configured allow-list.
"""

from __future__ import annotations

from collections.abc import Collection

from app.core.config import settings
from app.models.principal import Principal

ADMIN_ROLE = "admin"


def is_admin(
    principal: Principal | None,
    admin_emails: Collection[str] | None = None,
) -> bool:
    """Return True if *principal* may use the admin API.

    The ``admin`` role claim wins outright; otherwise the lower-cased email
    must appear in *admin_emails* (defaults to ``settings.admin_emails``).
    """
    if principal is None:
        return False
    if principal.role == ADMIN_ROLE:
        return True

    if admin_emails is None:
        admin_emails = settings.admin_emails

    email = principal.email.strip().lower()
    return bool(email) and email in admin_emails
