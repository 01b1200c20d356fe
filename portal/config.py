# portal/config.py
"""
Application configuration using Pydantic-Settings.
All settings can be overridden via environment variables or .env file.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # ── Admin ─────────────────────────────────────────────────────────────
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD_HASH: str = ""   # sha256 hex; empty rejects every admin login
    ADMIN_THEME: str = "rainfall"
    ADMIN_EMAIL: Optional[str] = None   # only address that may receive reset codes

    # ── External store (Supabase REST) ────────────────────────────────────
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    STORE_TIMEOUT_SECONDS: float = 10.0

    # ── Email (SendGrid) ──────────────────────────────────────────────────
    SENDGRID_API_KEY: Optional[str] = None
    OTP_FROM_EMAIL: Optional[str] = None

    # ── SMS (Twilio) ──────────────────────────────────────────────────────
    TWILIO_ACCOUNT_SID: Optional[str] = None
    TWILIO_AUTH_TOKEN: Optional[str] = None
    TWILIO_FROM_NUMBER: Optional[str] = None

    # ── Analytics (Mixpanel) ──────────────────────────────────────────────
    MIXPANEL_TOKEN: Optional[str] = None

    # ── Sessions ──────────────────────────────────────────────────────────
    SESSION_SECRET: str = "change-me"
    SESSION_TTL_HOURS: int = 12
    OTP_TTL_MINUTES: int = 10
    OTP_MAX_ATTEMPTS: int = 5
    ENFORCE_ADMIN_SESSION: bool = True

    # ── Network ───────────────────────────────────────────────────────────
    CORS_ORIGINS: str = "*"
    PORT: int = 8080

    # ── Logging ───────────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None   # set to also log to a rotating file there

    @property
    def store_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_ANON_KEY)

    @property
    def email_enabled(self) -> bool:
        return bool(self.SENDGRID_API_KEY)

    @property
    def sms_enabled(self) -> bool:
        return bool(self.TWILIO_ACCOUNT_SID and self.TWILIO_AUTH_TOKEN)

    @property
    def analytics_enabled(self) -> bool:
        return bool(self.MIXPANEL_TOKEN)

    @property
    def cors_origins(self) -> list:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
