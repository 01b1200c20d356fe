# portal/schemas/rating.py
from pydantic import BaseModel
from typing import Any, Optional

from portal.schemas.fields import CodeStr


class RatingIn(BaseModel):
    session_id: CodeStr = None
    stars: Any = None
    feedback: Optional[str] = None
