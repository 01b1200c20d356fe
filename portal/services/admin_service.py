# portal/services/admin_service.py
"""
Admin authentication and the OTP password-reset flow.

The admin account is a singleton configured by settings. A completed OTP
reset stores a replacement hash in `admin_credentials`; otherwise the hash
is ADMIN_PASSWORD_HASH. Codes only ever go to ADMIN_EMAIL. Pending codes
live in `admin_otps` (hashed, with an expiry and a failed-attempt count)
so they survive restarts and work across instances.
"""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

from fastapi import BackgroundTasks

from portal.config import settings
from portal.errors import (AdminNotConfigured, InvalidCredentials, InvalidOtp,
                           ValidationError)
from portal.services.notification_service import Notifier
from portal.services.session_service import ADMIN, ClientInfo, issue_session, record_session
from portal.store import SupabaseStore, eq_filter
from portal.utils.logger import get_logger

logger = get_logger(__name__)

CREDENTIALS_TABLE = "admin_credentials"
OTP_TABLE = "admin_otps"


def hash_password(password: str) -> str:
    return hashlib.sha256((password or "").encode("utf-8")).hexdigest()


def generate_otp() -> str:
    """6-digit numeric code in [100000, 999999]."""
    return str(100000 + secrets.randbelow(900000))


async def expected_password_hash(store: SupabaseStore) -> str:
    """Hash set by a completed OTP reset, else ADMIN_PASSWORD_HASH. Empty counts as unset."""
    if not store.configured:
        return settings.ADMIN_PASSWORD_HASH
    rows = await store.select(CREDENTIALS_TABLE,
                              eq_filter("username", settings.ADMIN_USERNAME),
                              "username,password_hash")
    if rows and rows[0].get("password_hash"):
        return rows[0]["password_hash"]
    return settings.ADMIN_PASSWORD_HASH


async def login(store: SupabaseStore, notifier: Notifier, tasks: BackgroundTasks,
                client: ClientInfo, username: str, password: str) -> dict:
    if username != settings.ADMIN_USERNAME:
        logger.warning(f"[ADMIN] Login rejected for unknown user '{username}'")
        raise InvalidCredentials()

    expected = await expected_password_hash(store)
    if not expected:
        logger.warning("[ADMIN] Login rejected: no admin password configured")
        raise AdminNotConfigured()
    if not hmac.compare_digest(hash_password(password), expected.lower()):
        logger.warning("[ADMIN] Login rejected: bad password")
        raise InvalidCredentials()

    session_id, token = issue_session(ADMIN)
    tasks.add_task(record_session, store, session_id, ADMIN, None, client)
    if notifier.analytics:
        tasks.add_task(notifier.analytics.track, "admin_login", session_id)
    logger.info(f"[ADMIN] Login ok, session {session_id}")
    return {"session": token, "theme": settings.ADMIN_THEME}


def _is_admin_email(email: str) -> bool:
    expected = (settings.ADMIN_EMAIL or "").strip().lower()
    return bool(expected) and email.strip().lower() == expected


async def reset(store: SupabaseStore, notifier: Notifier, email: str) -> None:
    """
    Send a one-time code to ADMIN_EMAIL, then drop any password set by an
    earlier reset so login falls back to ADMIN_PASSWORD_HASH.

    Requests naming any other address are ignored without telling the caller.
    Nothing changes unless the code was actually delivered.
    """
    if not email:
        raise ValidationError("email required")
    if not _is_admin_email(email):
        logger.warning("[ADMIN] Reset requested for a non-admin address, ignored")
        return
    if not notifier.email:
        logger.warning("[ADMIN] Email disabled: reset ignored, password unchanged")
        return

    otp = generate_otp()
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=settings.OTP_TTL_MINUTES)
    await store.upsert(OTP_TABLE,
                       {"username": settings.ADMIN_USERNAME,
                        "otp_hash": hash_password(otp),
                        "expires_at": expires_at.isoformat(),
                        "attempts": 0},
                       "username")

    await notifier.email.send([settings.ADMIN_EMAIL], "Your Admin OTP", f"Your OTP is {otp}")
    await store.delete(CREDENTIALS_TABLE, eq_filter("username", settings.ADMIN_USERNAME))
    logger.info(f"[ADMIN] Password reset requested, OTP valid until {expires_at.isoformat()}")


def _parse_ts(value) -> datetime:
    ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


async def _record_failed_attempt(store: SupabaseStore, pending: dict) -> None:
    attempts = int(pending.get("attempts") or 0) + 1
    if attempts >= settings.OTP_MAX_ATTEMPTS:
        logger.warning(f"[ADMIN] OTP discarded after {attempts} failed attempts")
        await store.delete(OTP_TABLE, eq_filter("username", settings.ADMIN_USERNAME))
        return
    await store.upsert(OTP_TABLE, {**pending, "attempts": attempts}, "username")


async def verify_otp(store: SupabaseStore, otp: str, new_password: str) -> None:
    rows = await store.select(OTP_TABLE, eq_filter("username", settings.ADMIN_USERNAME),
                              "username,otp_hash,expires_at,attempts")
    pending = rows[0] if rows else None
    if not pending or not otp:
        raise InvalidOtp()
    try:
        expired = _parse_ts(pending.get("expires_at")) <= datetime.now(timezone.utc)
    except ValueError:
        expired = True
    if expired or int(pending.get("attempts") or 0) >= settings.OTP_MAX_ATTEMPTS:
        logger.warning("[ADMIN] OTP rejected: expired or exhausted")
        await store.delete(OTP_TABLE, eq_filter("username", settings.ADMIN_USERNAME))
        raise InvalidOtp("OTP expired")
    if not hmac.compare_digest(hash_password(str(otp)), pending.get("otp_hash") or ""):
        logger.warning("[ADMIN] OTP rejected: mismatch")
        await _record_failed_attempt(store, pending)
        raise InvalidOtp()
    if not new_password:
        raise ValidationError("newPassword required")

    await store.upsert(CREDENTIALS_TABLE,
                       {"username": settings.ADMIN_USERNAME,
                        "password_hash": hash_password(new_password)},
                       "username")
    await store.delete(OTP_TABLE, eq_filter("username", settings.ADMIN_USERNAME))
    logger.info("[ADMIN] Password updated via OTP")
