# portal/services/passcode_service.py
"""
Passcode management and wall login.
A passcode grants wall access at its level (1–4). The passcode value is the
natural key: writes are upserts keyed on it.
"""

from fastapi import BackgroundTasks

from portal.errors import InvalidPasscode, ValidationError
from portal.services.notification_service import Notifier
from portal.services.session_service import PASSCODE, ClientInfo, issue_session, record_session
from portal.store import SupabaseStore, eq_filter
from portal.utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "passcodes"
MIN_LEVEL, MAX_LEVEL = 1, 4


def clamp(value, low: int, high: int, default: int) -> int:
    """Coerce to int and clamp into [low, high]. Non-numeric or zero → default."""
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        number = 0
    if not number:
        number = default
    return max(low, min(high, number))


def clamp_level(value) -> int:
    return clamp(value, MIN_LEVEL, MAX_LEVEL, default=MIN_LEVEL)


async def list_passcodes(store: SupabaseStore) -> list:
    rows = await store.select(TABLE, "", "passcode,level")
    return sorted(rows, key=lambda r: r.get("level") or 0)


async def upsert_passcode(store: SupabaseStore, passcode, level) -> dict:
    code = str(passcode).strip() if passcode is not None else ""
    if not code:
        raise ValidationError("passcode required")
    row = {"passcode": code, "level": clamp_level(level)}
    await store.upsert(TABLE, row, "passcode")
    logger.info(f"[PASSCODE] Saved passcode at level {row['level']}")
    return row


async def delete_passcode(store: SupabaseStore, passcode: str) -> None:
    # Idempotent: succeeds whether or not a row matched
    await store.delete(TABLE, eq_filter("passcode", passcode))
    logger.info("[PASSCODE] Deleted passcode")


async def passcode_login(store: SupabaseStore, notifier: Notifier, tasks: BackgroundTasks,
                         client: ClientInfo, passcode: str) -> dict:
    if not passcode:
        raise ValidationError("passcode required")
    rows = await store.select(TABLE, eq_filter("passcode", passcode), "passcode,level")
    entry = rows[0] if rows else None
    if not entry:
        logger.warning(f"[PASSCODE] Login rejected from {client.ip or 'unknown'}")
        raise InvalidPasscode()

    level = entry.get("level")
    session_id, token = issue_session(PASSCODE, level)
    tasks.add_task(record_session, store, session_id, PASSCODE, level, client)
    if notifier.analytics:
        tasks.add_task(notifier.analytics.track, "passcode_login", session_id, level=level)
    logger.info(f"[PASSCODE] Login ok at level {level}, session {session_id}")
    return {"session": token, "level": level}
