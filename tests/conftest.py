"""Shared fixtures: an in-memory stand-in for the Supabase store and an API client."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from unittest.mock import AsyncMock, MagicMock
from urllib.parse import unquote

import pytest
from fastapi.testclient import TestClient

from portal.config import settings
from portal.main import app
from portal.services.admin_service import hash_password
from portal.services.notification_service import Notifier, get_notifier
from portal.services.session_service import ADMIN, issue_session
from portal.store import get_store

ADMIN_PASSWORD = "s3cret"
ADMIN_EMAIL = "me@example.com"


class FakeStore:
    """Mimics the PostgREST semantics SupabaseStore relies on (eq filters, upsert on conflict)."""

    configured = True

    def __init__(self):
        self.tables = {}

    def rows(self, table):
        return self.tables.setdefault(table, [])

    @staticmethod
    def _matches(row, filter):
        if not filter:
            return True
        column, _, expr = filter.partition("=")
        op, _, value = expr.partition(".")
        assert op == "eq", f"unsupported filter {filter}"
        return str(row.get(column)) == unquote(value)

    async def select(self, table, filter="", columns="*"):
        picked = [r for r in self.rows(table) if self._matches(r, filter)]
        if columns and columns != "*":
            names = columns.split(",")
            picked = [{k: r.get(k) for k in names} for r in picked]
        return [dict(r) for r in picked]

    async def insert(self, table, row):
        self.rows(table).append(dict(row))
        return dict(row)

    async def upsert(self, table, row, conflict_column=None):
        rows = self.rows(table)
        if conflict_column:
            for existing in rows:
                if existing.get(conflict_column) == row.get(conflict_column):
                    existing.update(row)
                    return dict(existing)
        rows.append(dict(row))
        return dict(row)

    async def delete(self, table, filter):
        self.tables[table] = [r for r in self.rows(table) if not self._matches(r, filter)]


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def notifier():
    return Notifier(
        email=MagicMock(send=AsyncMock()),
        sms=MagicMock(send=AsyncMock()),
        analytics=MagicMock(track=AsyncMock()),
    )


@pytest.fixture(autouse=True)
def portal_settings(monkeypatch):
    monkeypatch.setattr(settings, "ADMIN_USERNAME", "admin")
    monkeypatch.setattr(settings, "ADMIN_PASSWORD_HASH", hash_password(ADMIN_PASSWORD))
    monkeypatch.setattr(settings, "ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setattr(settings, "OTP_MAX_ATTEMPTS", 5)
    monkeypatch.setattr(settings, "SESSION_SECRET", "test-secret")
    monkeypatch.setattr(settings, "ENFORCE_ADMIN_SESSION", True)
    return settings


@pytest.fixture
def client(store, notifier):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_notifier] = lambda: notifier
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    _, token = issue_session(ADMIN)
    return {"x-admin-session": token}
