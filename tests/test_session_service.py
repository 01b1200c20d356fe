"""Unit tests for signed session tokens and the audit log."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import AsyncMock, MagicMock
from portal.errors import ExternalStoreError, SessionRequired
from portal.services.session_service import (ClientInfo, issue_session, record_session,
                                             require_admin, verify_session)


class TestTokens:
    def test_round_trip_claims(self):
        session_id, token = issue_session("passcode", 2)
        claims = verify_session(token, "passcode")
        assert claims["sub"] == session_id
        assert claims["level"] == 2

    def test_wrong_kind_rejected(self):
        _, token = issue_session("passcode", 4)
        with pytest.raises(SessionRequired):
            verify_session(token, "admin")

    def test_tampered_token_rejected(self):
        _, admin_token = issue_session("admin")
        _, other_token = issue_session("passcode", 4)
        header, _, signature = admin_token.split(".")
        forged = ".".join([header, other_token.split(".")[1], signature])
        with pytest.raises(SessionRequired):
            verify_session(forged)

    def test_token_signed_with_other_secret_rejected(self, portal_settings, monkeypatch):
        _, token = issue_session("admin")
        monkeypatch.setattr(portal_settings, "SESSION_SECRET", "rotated")
        with pytest.raises(SessionRequired):
            verify_session(token, "admin")

    def test_expired_token_rejected(self, portal_settings, monkeypatch):
        monkeypatch.setattr(portal_settings, "SESSION_TTL_HOURS", -1)
        _, token = issue_session("admin")
        with pytest.raises(SessionRequired):
            verify_session(token, "admin")

    def test_require_admin_can_be_disabled(self, portal_settings, monkeypatch):
        monkeypatch.setattr(portal_settings, "ENFORCE_ADMIN_SESSION", False)
        assert require_admin(None) is None


class TestRecordSession:
    @pytest.mark.asyncio
    async def test_writes_audit_row(self, store):
        await record_session(store, "sid", "passcode", 3, ClientInfo(ip="10.0.0.1", ua="pytest"))
        row = store.rows("sessions")[0]
        assert row["id"] == "sid"
        assert row["type"] == "passcode"
        assert row["code_level"] == 3
        assert row["ip"] == "10.0.0.1"

    @pytest.mark.asyncio
    async def test_store_failure_is_swallowed(self):
        store = MagicMock(insert=AsyncMock(side_effect=ExternalStoreError(503, "down")))
        await record_session(store, "sid", "admin", None, ClientInfo())
        store.insert.assert_awaited_once()
