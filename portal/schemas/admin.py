# portal/schemas/admin.py
from pydantic import BaseModel
from typing import Optional

from portal.schemas.fields import CodeStr


class AdminLogin(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class AdminSession(BaseModel):
    session: str
    theme: str


class ResetRequest(BaseModel):
    email: Optional[str] = None


class VerifyOtp(BaseModel):
    otp: CodeStr = None
    newPassword: Optional[str] = None
