"""Shared test fixtures.

Provides an in-memory stand-in for the Supabase query builder, public and
service client fixtures sharing one fake database, helpers to sign a
principal in, and a ``test_client`` for FastAPI.
"""

import os

os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-test-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "service-test-key")
os.environ.setdefault("ADMIN_EMAILS", " Boss@Example.com, ,ops@example.com ")

from collections.abc import Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

ADMIN_EMAIL = "boss@example.com"
USER_EMAIL = "tech.user@example.com"
SESSION_TOKEN = "session-token-abc123"


# ---------------------------------------------------------------------------
# Fake Supabase
# ---------------------------------------------------------------------------

class FakeDatabase:
    """Rows per table plus an id sequence shared by every fake client."""

    def __init__(self) -> None:
        self.tables: dict[str, list[dict[str, Any]]] = {}
        self.next_id = 1

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables.setdefault(table, [])


class FakeQuery:
    """Mimics ``client.table(...).<op>(...).eq(...).limit(...).execute()``."""

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self._client = client
        self._table = table
        self._op = "select"
        self._columns: list[str] | None = None
        self._payload: dict[str, Any] | None = None
        self._filters: list[tuple[str, Any]] = []
        self._limit: int | None = None

    def select(self, columns: str = "*") -> "FakeQuery":
        self._op = "select"
        if columns.strip() != "*":
            self._columns = [c.strip() for c in columns.split(",")]
        return self

    def insert(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op = "insert"
        self._payload = dict(payload)
        return self

    def update(self, payload: dict[str, Any]) -> "FakeQuery":
        self._op = "update"
        self._payload = dict(payload)
        return self

    def delete(self) -> "FakeQuery":
        self._op = "delete"
        return self

    def eq(self, column: str, value: Any) -> "FakeQuery":
        self._filters.append((column, value))
        return self

    def limit(self, count: int) -> "FakeQuery":
        self._limit = count
        return self

    def execute(self) -> SimpleNamespace:
        self._client.calls.append(
            {
                "table": self._table,
                "op": self._op,
                "payload": self._payload,
                "filters": list(self._filters),
                "limit": self._limit,
            }
        )
        if self._client.error is not None:
            raise self._client.error

        db = self._client.db
        rows = db.rows(self._table)
        matched = [
            row for row in rows
            if all(row.get(column) == value for column, value in self._filters)
        ]

        if self._op == "insert":
            row = {
                "id": db.next_id,
                "region": None,
                "email": None,
                "phone": None,
                "tech_manager_email": None,
                "tech_manager_phone": None,
                "ops_manager_email": None,
                "ops_manager_phone": None,
                **(self._payload or {}),
            }
            db.next_id += 1
            rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        if self._op == "update":
            for row in matched:
                row.update(self._payload or {})
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self._op == "delete":
            for row in matched:
                rows.remove(row)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self._limit is not None:
            matched = matched[: self._limit]
        if self._columns is not None:
            matched = [{c: row.get(c) for c in self._columns} for row in matched]
        else:
            matched = [dict(row) for row in matched]
        return SimpleNamespace(data=matched)


class FakeSupabase:
    """One credential tier.  ``calls`` records every executed query."""

    def __init__(self, db: FakeDatabase) -> None:
        self.db = db
        self.calls: list[dict[str, Any]] = []
        self.error: Exception | None = None
        self.auth = MagicMock()
        self.auth.get_user.return_value = None

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def mutations(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["op"] in ("insert", "update", "delete")]


def make_user(email: str, role: str | None = None) -> SimpleNamespace:
    """Shape of a Supabase auth ``User`` as far as the app reads it."""
    app_metadata = {"provider": "email"}
    if role is not None:
        app_metadata["role"] = role
    return SimpleNamespace(email=email, app_metadata=app_metadata)


def sign_in_as(
    client: TestClient,
    public: FakeSupabase,
    email: str,
    role: str | None = None,
) -> None:
    """Give *client* a session cookie that resolves to *email*."""
    from app.core.config import settings

    public.auth.get_user.return_value = SimpleNamespace(user=make_user(email, role))
    client.cookies.set(settings.SESSION_COOKIE_NAME, SESSION_TOKEN)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def database() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture()
def public_client(database: FakeDatabase) -> FakeSupabase:
    return FakeSupabase(database)


@pytest.fixture()
def service_client(database: FakeDatabase) -> FakeSupabase:
    return FakeSupabase(database)


@pytest.fixture()
def seed(database: FakeDatabase):
    """Insert a technician row directly and return it."""
    from app.core.config import settings

    def _seed(code: str, name: str, **fields: Any) -> dict[str, Any]:
        row = {
            "id": database.next_id,
            "code": code,
            "name": name,
            "region": None,
            "email": None,
            "phone": None,
            "tech_manager_email": None,
            "tech_manager_phone": None,
            "ops_manager_email": None,
            "ops_manager_phone": None,
            **fields,
        }
        database.next_id += 1
        database.rows(settings.TECHNICIAN_TABLE).append(row)
        return row

    return _seed


@pytest.fixture()
def test_client(
    public_client: FakeSupabase, service_client: FakeSupabase
) -> Generator[TestClient, None, None]:
    """Provide a FastAPI TestClient wired to the fake clients."""
    from app.db.supabase import SupabaseClients
    from app.main import app

    clients = SupabaseClients(public=public_client, service=service_client)
    with patch("app.main.create_clients", return_value=clients):
        with TestClient(app) as client:
            yield client


@pytest.fixture()
def admin_client(
    test_client: TestClient, public_client: FakeSupabase
) -> TestClient:
    """TestClient signed in as an allow-listed administrator."""
    sign_in_as(test_client, public_client, ADMIN_EMAIL)
    return test_client


@pytest.fixture()
def user_client(
    test_client: TestClient, public_client: FakeSupabase
) -> TestClient:
    """TestClient signed in as a regular, non-admin user."""
    sign_in_as(test_client, public_client, USER_EMAIL)
    return test_client


@pytest.fixture()
def sign_in(test_client: TestClient, public_client: FakeSupabase):
    """Return ``sign_in(email, role=None)`` bound to ``test_client``."""

    def _sign_in(email: str, role: str | None = None) -> None:
        sign_in_as(test_client, public_client, email, role)

    return _sign_in
