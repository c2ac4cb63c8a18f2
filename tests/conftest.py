# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - FakeStore: in-memory stand-in for SupabaseStore (same async interface)
# - App / client fixtures wired to a FakeStore through AppContext
# =============================================================================

import os
from collections import defaultdict
from datetime import datetime
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SESSION_SECRET", "test-session-secret-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.context import AppContext
from app.main import create_app
from lib.supabase_client import SupabaseClientError


# =============================================================================
# In-memory store
# =============================================================================

class FakeStore:
    """
    In-memory implementation of the SupabaseStore interface.

    Rows are kept per table in insertion order. Set `fail_on` to a set of
    operation names ("insert", "find", "delete", "delete_before", "ping")
    to make those operations raise SupabaseClientError.
    """

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.fail_on: set[str] = set()

    def _maybe_fail(self, operation: str) -> None:
        if operation in self.fail_on:
            raise SupabaseClientError(
                message=f"Simulated {operation} failure",
                code="SIMULATED_FAILURE",
            )

    @staticmethod
    def _matches(row: dict[str, Any], filters: dict[str, Any]) -> bool:
        return all(row.get(column) == value for column, value in filters.items())

    def rows(self, table: str) -> list[dict[str, Any]]:
        return self.tables[table]

    async def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        self._maybe_fail("insert")
        self.tables[table].append(dict(row))
        return dict(row)

    async def find(
        self,
        table: str,
        *,
        filters: dict[str, Any],
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        self._maybe_fail("find")
        found = [dict(row) for row in self.tables[table] if self._matches(row, filters)]
        if order_by:
            found.sort(key=lambda row: row[order_by])
        if limit:
            found = found[:limit]
        return found

    async def find_one(self, table: str, *, filters: dict[str, Any]) -> dict[str, Any] | None:
        found = await self.find(table, filters=filters, limit=1)
        return found[0] if found else None

    async def delete(self, table: str, *, filters: dict[str, Any]) -> int:
        self._maybe_fail("delete")
        kept = [row for row in self.tables[table] if not self._matches(row, filters)]
        removed = len(self.tables[table]) - len(kept)
        self.tables[table] = kept
        return removed

    async def delete_before(self, table: str, *, column: str, cutoff: str) -> int:
        self._maybe_fail("delete_before")
        limit = datetime.fromisoformat(cutoff)
        kept = [
            row for row in self.tables[table]
            if datetime.fromisoformat(row[column]) >= limit
        ]
        removed = len(self.tables[table]) - len(kept)
        self.tables[table] = kept
        return removed

    async def ping(self, table: str = "users") -> None:
        self._maybe_fail("ping")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def test_settings():
    """Development settings with a cheap bcrypt cost for fast tests."""
    return settings.model_copy(update={"ENVIRONMENT": "development", "BCRYPT_ROUNDS": 4})


@pytest.fixture
def store():
    """Empty in-memory store."""
    return FakeStore()


@pytest.fixture
def context(test_settings, store):
    """Application context wired to the in-memory store."""
    return AppContext.build(test_settings, store)


@pytest.fixture
def app(context):
    """FastAPI app using the test context (no Supabase connection)."""
    return create_app(context=context)


@pytest.fixture
def client(app):
    """Test client with its own cookie jar."""
    return TestClient(app)


@pytest.fixture
def make_client(app):
    """Factory for extra clients (separate browsers) against the same app."""
    return lambda: TestClient(app)


@pytest.fixture
def cookie_name(test_settings):
    return test_settings.SESSION_COOKIE_NAME


@pytest.fixture
def sample_user():
    """Sample signup payload."""
    return {"name": "Ada", "email": "ada@example.com", "password": "p1-secret"}


@pytest.fixture
def logged_in_client(client, sample_user):
    """Client that has signed up and logged in as sample_user."""
    assert client.post("/signup", json=sample_user).status_code == 201
    response = client.post(
        "/login",
        json={"email": sample_user["email"], "password": sample_user["password"]},
    )
    assert response.status_code == 200
    return client


@pytest.fixture
def sample_income():
    """Sample ledger entry payload."""
    return {
        "description": "salary",
        "date": "2024-01-01",
        "amount": 1000,
        "category": "job",
    }
