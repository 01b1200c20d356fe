# portal/routers/events.py
"""
Event wall endpoints.
GET lists events visible at ?level=N; a valid passcode session in
X-Session caps the level at the one the passcode granted.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from portal.schemas.event import EventCreate, EventOut
from portal.services import event_service
from portal.services.session_service import optional_viewer, require_admin
from portal.store import SupabaseStore, get_store

router = APIRouter()


def _level_param(level: Optional[str]) -> int:
    try:
        return max(0, int(float(level)))
    except (TypeError, ValueError, OverflowError):
        return 0


@router.get("/events", response_model=list[EventOut], summary="List events, newest first")
async def list_events(level: Optional[str] = None,
                      viewer: Optional[dict] = Depends(optional_viewer),
                      store: SupabaseStore = Depends(get_store)):
    requested = _level_param(level)
    if viewer and viewer.get("level"):
        granted = int(viewer["level"])
        requested = min(requested, granted) if requested else granted
    return await event_service.list_events(store, requested)


@router.post("/events", summary="Create an event", dependencies=[Depends(require_admin)])
async def create_event(body: EventCreate, store: SupabaseStore = Depends(get_store)):
    event_id = await event_service.create_event(store, body.model_dump())
    return {"id": event_id}


@router.delete("/events/{event_id}", summary="Remove an event",
               dependencies=[Depends(require_admin)])
async def delete_event(event_id: str, store: SupabaseStore = Depends(get_store)):
    await event_service.delete_event(store, event_id)
    return {"ok": True}
