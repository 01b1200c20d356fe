# portal/schemas/event.py
from pydantic import BaseModel
from typing import Any, Optional


class EventCreate(BaseModel):
    title: Optional[str] = None
    date: Optional[str] = None           # ISO YYYY-MM-DD
    level: Any = None
    description: Optional[str] = None
    driveFolderId: Optional[str] = None
    bookingUrl: Optional[str] = None


class EventOut(BaseModel):
    id: str
    title: Optional[str] = None
    date: Optional[str] = None
    level: Optional[int] = None
    description: Optional[str] = None
    driveFolderId: Optional[str] = None
    bookingUrl: Optional[str] = None
