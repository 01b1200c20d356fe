"""Unit tests for passcode management and wall login."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from unittest.mock import MagicMock, AsyncMock
from portal.errors import InvalidPasscode, ValidationError
from portal.services.passcode_service import (clamp_level, delete_passcode, list_passcodes,
                                              passcode_login, upsert_passcode)
from portal.services.session_service import ClientInfo, verify_session


class TestClampLevel:
    @pytest.mark.parametrize("value,expected", [
        (0, 1), (99, 4), ("abc", 1), (None, 1), (-3, 1), ("3", 3), (2.7, 2), (4, 4),
    ])
    def test_clamped_into_range(self, value, expected):
        assert clamp_level(value) == expected


class TestPasscodeService:
    @pytest.mark.asyncio
    async def test_list_sorted_by_level(self, store):
        store.tables["passcodes"] = [
            {"passcode": "C", "level": 3}, {"passcode": "A", "level": 1}, {"passcode": "B", "level": 2},
        ]
        rows = await list_passcodes(store)
        assert [r["passcode"] for r in rows] == ["A", "B", "C"]

    @pytest.mark.asyncio
    async def test_empty_passcode_rejected(self, store):
        with pytest.raises(ValidationError):
            await upsert_passcode(store, "  ", 2)
        assert store.rows("passcodes") == []

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent_and_keeps_latest_level(self, store):
        await upsert_passcode(store, "ABC1", 2)
        await upsert_passcode(store, "ABC1", 3)
        assert store.rows("passcodes") == [{"passcode": "ABC1", "level": 3}]

    @pytest.mark.asyncio
    async def test_upsert_uses_passcode_as_conflict_key(self):
        store = MagicMock(upsert=AsyncMock())
        await upsert_passcode(store, "ABC1", 9)
        store.upsert.assert_awaited_once_with("passcodes", {"passcode": "ABC1", "level": 4}, "passcode")

    @pytest.mark.asyncio
    async def test_delete_missing_passcode_succeeds(self, store):
        await delete_passcode(store, "NOPE")
        assert store.rows("passcodes") == []


class TestPasscodeLogin:
    @pytest.mark.asyncio
    async def test_unknown_code_rejected(self, store, notifier):
        tasks = MagicMock()
        with pytest.raises(InvalidPasscode):
            await passcode_login(store, notifier, tasks, ClientInfo(), "WRONG")
        tasks.add_task.assert_not_called()

    @pytest.mark.asyncio
    async def test_known_code_returns_level_and_signed_session(self, store, notifier):
        store.tables["passcodes"] = [{"passcode": "FAM1", "level": 3}]
        tasks = MagicMock()

        result = await passcode_login(store, notifier, tasks, ClientInfo(ip="1.2.3.4"), "FAM1")

        assert result["level"] == 3
        claims = verify_session(result["session"], "passcode")
        assert claims["level"] == 3
        # audit row + analytics scheduled as background work
        assert tasks.add_task.call_count == 2

    @pytest.mark.asyncio
    async def test_missing_code_is_validation_error(self, store, notifier):
        with pytest.raises(ValidationError):
            await passcode_login(store, notifier, MagicMock(), ClientInfo(), "")
