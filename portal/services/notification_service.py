# portal/services/notification_service.py
"""
Outbound notification providers: SendGrid (email), Twilio (SMS), Mixpanel (analytics).
Each provider is only built when its credentials are configured; a missing
provider is represented as None and silently skips that feature.
"""

import base64
import json
from dataclasses import dataclass
from typing import Optional

import httpx

from portal.config import settings
from portal.errors import NotificationError
from portal.utils.logger import get_logger

logger = get_logger(__name__)

SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"
TWILIO_URL = "https://api.twilio.com/2010-04-01/Accounts/{sid}/Messages.json"
MIXPANEL_URL = "https://api.mixpanel.com/track"

PROVIDER_TIMEOUT = 10


class EmailClient:
    def __init__(self, api_key: str, from_email: Optional[str]):
        self.api_key = api_key
        self.from_email = from_email

    async def send(self, to: list, subject: str, text: str) -> None:
        """Send a single message addressed to every recipient in `to`."""
        payload = {
            "personalizations": [{"to": [{"email": addr} for addr in to]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [{"type": "text/plain", "value": text}],
        }
        async with httpx.AsyncClient(timeout=PROVIDER_TIMEOUT) as client:
            response = await client.post(
                SENDGRID_URL, json=payload,
                headers={"Authorization": f"Bearer {self.api_key}"},
            )
        if response.is_error:
            raise NotificationError("sendgrid", response.status_code, response.text)
        logger.info(f"[EMAIL] Sent '{subject}' to {len(to)} recipient(s)")


class SmsClient:
    def __init__(self, account_sid: str, auth_token: str, from_number: Optional[str]):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.from_number = from_number

    async def send(self, to: str, body: str) -> None:
        async with httpx.AsyncClient(timeout=PROVIDER_TIMEOUT,
                                     auth=(self.account_sid, self.auth_token)) as client:
            response = await client.post(
                TWILIO_URL.format(sid=self.account_sid),
                data={"From": self.from_number, "To": to, "Body": body},
            )
        if response.is_error:
            raise NotificationError("twilio", response.status_code, response.text)
        logger.info(f"[SMS] Sent to {to}")


class Analytics:
    def __init__(self, token: str):
        self.token = token

    async def track(self, event: str, distinct_id: str, **properties) -> None:
        """Best-effort: failures are logged and never raised."""
        data = {"event": event,
                "properties": {"token": self.token, "distinct_id": distinct_id, **properties}}
        encoded = base64.b64encode(json.dumps([data]).encode()).decode()
        try:
            async with httpx.AsyncClient(timeout=PROVIDER_TIMEOUT) as client:
                response = await client.post(MIXPANEL_URL, data={"data": encoded})
            if response.is_error:
                logger.error(f"[ANALYTICS] {event} → HTTP {response.status_code}")
        except httpx.HTTPError as e:
            logger.error(f"[ANALYTICS] Failed to track {event}: {e}")


@dataclass
class Notifier:
    email: Optional[EmailClient] = None
    sms: Optional[SmsClient] = None
    analytics: Optional[Analytics] = None


def get_notifier() -> Notifier:
    """FastAPI dependency — providers built from whatever credentials are set."""
    return Notifier(
        email=EmailClient(settings.SENDGRID_API_KEY, settings.OTP_FROM_EMAIL)
        if settings.email_enabled else None,
        sms=SmsClient(settings.TWILIO_ACCOUNT_SID, settings.TWILIO_AUTH_TOKEN,
                      settings.TWILIO_FROM_NUMBER)
        if settings.sms_enabled else None,
        analytics=Analytics(settings.MIXPANEL_TOKEN) if settings.analytics_enabled else None,
    )
