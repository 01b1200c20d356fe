# portal/services/session_service.py
"""
Session tokens and the write-only session audit log.

Tokens are HS256 JWTs signed with SESSION_SECRET. Claims:
  sub   — opaque session id (also the id of the audit row)
  type  — "admin" | "passcode"
  level — access level for passcode sessions, None for admin
The audit row in `sessions` is never read back; authorization relies on the
signature and expiry only.
"""

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Header, Request
from jose import JWTError, jwt

from portal.config import settings
from portal.errors import SessionRequired
from portal.utils.logger import get_logger

logger = get_logger(__name__)

ALGORITHM = "HS256"
ADMIN = "admin"
PASSCODE = "passcode"


@dataclass
class ClientInfo:
    ip: str = ""
    ua: str = ""


def client_info(request: Request) -> ClientInfo:
    """FastAPI dependency — caller IP (first X-Forwarded-For hop) and user agent."""
    forwarded = request.headers.get("x-forwarded-for", "")
    ip = forwarded.split(",")[0].strip() if forwarded else ""
    if not ip and request.client:
        ip = request.client.host
    return ClientInfo(ip=ip, ua=request.headers.get("user-agent", ""))


def new_id() -> str:
    return secrets.token_urlsafe(16)


def issue_session(kind: str, level: Optional[int] = None) -> tuple:
    """Returns (session_id, signed token)."""
    session_id = new_id()
    now = datetime.now(timezone.utc)
    claims = {
        "sub": session_id,
        "type": kind,
        "level": level,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=settings.SESSION_TTL_HOURS)).timestamp()),
    }
    return session_id, jwt.encode(claims, settings.SESSION_SECRET, algorithm=ALGORITHM)


def verify_session(token: Optional[str], kind: str = None) -> dict:
    if not token:
        raise SessionRequired()
    try:
        claims = jwt.decode(token, settings.SESSION_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.info(f"[SESSION] Rejected token: {e}")
        raise SessionRequired("Invalid or expired session")
    if kind and claims.get("type") != kind:
        raise SessionRequired("Invalid or expired session")
    return claims


def require_admin(x_admin_session: Optional[str] = Header(None)) -> Optional[dict]:
    """Dependency guarding admin-only routes."""
    if not settings.ENFORCE_ADMIN_SESSION:
        return None
    return verify_session(x_admin_session, ADMIN)


def optional_viewer(x_session: Optional[str] = Header(None)) -> Optional[dict]:
    """Passcode session claims when a valid token is supplied, else None."""
    if not x_session:
        return None
    try:
        return verify_session(x_session, PASSCODE)
    except SessionRequired:
        return None


async def record_session(store, session_id: str, kind: str, level: Optional[int],
                         client: ClientInfo) -> None:
    """Best-effort audit row. Runs as a background task; never raises."""
    try:
        await store.insert("sessions", {
            "id": session_id,
            "type": kind,
            "code_level": level,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "ip": client.ip,
            "ua": client.ua,
        })
    except Exception as e:
        logger.error(f"[SESSION] Failed to record {kind} session: {e}")
