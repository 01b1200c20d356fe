# portal/services/announcement_service.py
"""
Broadcast an announcement by email (one message, all recipients) and SMS
(one message per phone, sent concurrently). Counts returned are the
intended recipients, not confirmed deliveries.
"""

import asyncio

from portal.services.notification_service import Notifier
from portal.utils.logger import get_logger

logger = get_logger(__name__)


def split_recipients(raw) -> list:
    return [part.strip() for part in (raw or "").split(",") if part.strip()]


async def send_announcement(notifier: Notifier, title: str, message: str,
                            emails: str, phones: str) -> dict:
    email_list = split_recipients(emails)
    phone_list = split_recipients(phones)

    if notifier.email and email_list:
        await notifier.email.send(email_list, title or "Announcement", message or "")

    if notifier.sms and phone_list:
        body = (f"{title}: " if title else "") + (message or "")
        results = await asyncio.gather(
            *(notifier.sms.send(phone, body) for phone in phone_list),
            return_exceptions=True,
        )
        for phone, result in zip(phone_list, results):
            if isinstance(result, Exception):
                logger.error(f"[ANNOUNCE] SMS to {phone} failed: {result}")

    logger.info(f"[ANNOUNCE] '{title}' → {len(email_list)} email(s), {len(phone_list)} sms")
    return {"ok": True, "sentEmail": len(email_list), "sentSms": len(phone_list)}
