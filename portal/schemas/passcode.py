# portal/schemas/passcode.py
from pydantic import BaseModel
from typing import Any, Optional

from portal.schemas.fields import CodeStr


class PasscodeIn(BaseModel):
    passcode: CodeStr = None
    level: Any = None          # clamped to 1–4 by the service; junk → 1


class PasscodeOut(BaseModel):
    passcode: str
    level: Optional[int] = None


class PasscodeLogin(BaseModel):
    passcode: CodeStr = None


class PasscodeSession(BaseModel):
    session: str
    level: Optional[int] = None
