"""Pydantic models for the technician table.

``TechnicianCreate`` and ``TechnicianUpdate`` are built from untrusted JSON:
only the declared columns are extracted, everything else (``id`` included)
is dropped at validation time and never reaches the store.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class TechnicianContact(BaseModel):
    """Contact projection returned by the search endpoint."""
    name: str
    region: str | None = None
    email: str | None = None
    phone: str | None = None
    tech_manager_email: str | None = None
    tech_manager_phone: str | None = None
    ops_manager_email: str | None = None
    ops_manager_phone: str | None = None


class Technician(TechnicianContact):
    """Full technician record returned from the database."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str


class TechnicianUpdate(BaseModel):
    """Partial update payload. Every column optional, ``id`` absent."""
    model_config = ConfigDict(extra="ignore")

    code: str | None = None
    name: str | None = None
    region: str | None = None
    email: str | None = None
    phone: str | None = None
    tech_manager_email: str | None = None
    tech_manager_phone: str | None = None
    ops_manager_email: str | None = None
    ops_manager_phone: str | None = None

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, value: Any) -> Any:
        # Stored upper-cased so the normalized search lookup finds it
        if not isinstance(value, str):
            raise ValueError("code must be a string")
        value = value.strip().upper()
        if not value:
            raise ValueError("code must not be blank")
        return value

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError("name must be a string")
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    def changes(self) -> dict[str, Any]:
        """Return only the columns present in the request payload."""
        return self.model_dump(exclude_unset=True)


class TechnicianCreate(TechnicianUpdate):
    """Insert payload: ``code`` and ``name`` are mandatory."""
    code: str
    name: str
