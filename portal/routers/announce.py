# portal/routers/announce.py
from fastapi import APIRouter, Depends

from portal.schemas.announcement import AnnouncementIn, AnnouncementResult
from portal.services.announcement_service import send_announcement
from portal.services.notification_service import Notifier, get_notifier
from portal.services.session_service import require_admin

router = APIRouter()


@router.post("/announce", response_model=AnnouncementResult, summary="Broadcast by email and SMS",
             dependencies=[Depends(require_admin)])
async def announce(body: AnnouncementIn, notifier: Notifier = Depends(get_notifier)):
    return await send_announcement(notifier, body.title, body.message, body.emails, body.phones)
