# portal/services/event_service.py
"""Wall events: list filtered by viewer level, create, delete."""

from datetime import datetime

from portal.services.passcode_service import clamp_level
from portal.services.session_service import new_id
from portal.store import SupabaseStore, eq_filter
from portal.utils.logger import get_logger

logger = get_logger(__name__)

TABLE = "events"
COLUMNS = "id,title,date,level,description,driveFolderId,bookingUrl"
TEXT_FIELDS = ("title", "date", "description", "driveFolderId", "bookingUrl")


def parse_event_date(value):
    """ISO date or timestamp → date. None when missing or unparseable."""
    if not value:
        return None
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def sort_newest_first(events: list) -> list:
    """
    Dated events first, newest first. Undated/unparseable ones follow,
    ordered by their raw string descending.
    """
    dated, undated = [], []
    for ev in events:
        (dated if parse_event_date(ev.get("date")) else undated).append(ev)
    dated.sort(key=lambda ev: (parse_event_date(ev["date"]), str(ev["date"])), reverse=True)
    undated.sort(key=lambda ev: str(ev.get("date") or ""), reverse=True)
    return dated + undated


async def list_events(store: SupabaseStore, level: int = 0) -> list:
    rows = await store.select(TABLE, "", COLUMNS)
    if level:
        rows = [ev for ev in rows if (ev.get("level") or 1) <= level]
    return sort_newest_first(rows)


async def create_event(store: SupabaseStore, fields: dict) -> str:
    event_id = new_id()
    row = {"id": event_id, "level": clamp_level(fields.get("level"))}
    for name in TEXT_FIELDS:
        row[name] = fields.get(name) or ""
    await store.insert(TABLE, row)
    logger.info(f"[EVENT] Created {event_id} '{row['title']}' level={row['level']}")
    return event_id


async def delete_event(store: SupabaseStore, event_id: str) -> None:
    await store.delete(TABLE, eq_filter("id", event_id))
    logger.info(f"[EVENT] Deleted {event_id}")
