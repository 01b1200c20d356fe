# portal/services/rating_service.py
"""Visitor feedback ratings: write-only."""

from datetime import datetime, timezone

from portal.errors import ValidationError
from portal.services.session_service import new_id
from portal.store import SupabaseStore
from portal.utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "ratings"


def clamp_stars(value) -> int:
    """Clamp into [1, 5]. Absent or non-numeric means a full 5 stars."""
    if value is None or value == "":
        return 5
    try:
        stars = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 5
    return max(1, min(5, stars))


async def create_rating(store: SupabaseStore, session_id, stars, feedback) -> dict:
    if not session_id:
        raise ValidationError("session_id required")
    rating = {
        "id": new_id(),
        "session_id": session_id,
        "stars": clamp_stars(stars),
        "feedback": feedback or "",
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    await store.insert(TABLE, rating)
    logger.info(f"[RATING] {rating['stars']} star(s) from session {session_id}")
    return rating
