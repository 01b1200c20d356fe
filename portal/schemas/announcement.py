# portal/schemas/announcement.py
from pydantic import BaseModel
from typing import Optional


class AnnouncementIn(BaseModel):
    title: Optional[str] = None
    message: Optional[str] = None
    emails: Optional[str] = None     # comma-separated
    phones: Optional[str] = None     # comma-separated, E.164


class AnnouncementResult(BaseModel):
    ok: bool
    sentEmail: int
    sentSms: int
