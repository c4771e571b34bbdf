"""
Transactional email dispatch through the Brevo HTTP API
"""

import logging
from dataclasses import dataclass
from typing import List

import httpx

from fastapi import Depends

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailRecipient:
    email: str
    name: str = ""

    def to_payload(self) -> dict:
        payload = {"email": self.email}
        if self.name:
            payload["name"] = self.name
        return payload


class BrevoEmailService:
    """Sends one email per call; failures are logged and reported as False"""

    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport = None):
        self.config = config
        self.transport = transport

    def organizer_recipients(self) -> List[EmailRecipient]:
        return [
            EmailRecipient(email=r["email"], name=r.get("name", ""))
            for r in self.config.ORGANIZER_RECIPIENTS
        ]

    async def send_email(self, to: List[EmailRecipient], subject: str, html_content: str) -> bool:
        if not self.config.BREVO_API_KEY:
            logger.error(f"BREVO_API_KEY not configured, skipping email '{subject}'")
            return False

        payload = {
            "sender": {"email": self.config.SENDER_EMAIL, "name": self.config.SENDER_NAME},
            "to": [recipient.to_payload() for recipient in to],
            "subject": subject,
            "htmlContent": html_content,
        }
        headers = {
            "accept": "application/json",
            "api-key": self.config.BREVO_API_KEY,
            "content-type": "application/json",
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.config.EMAIL_TIMEOUT_SECONDS,
                transport=self.transport,
            ) as client:
                response = await client.post(self.config.BREVO_API_URL, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Email send error for '{subject}': {e}")
            return False

        if response.is_error:
            logger.error(f"Brevo API error ({response.status_code}): {response.text}")
            return False

        logger.info(f"Email '{subject}' sent to {len(to)} recipient(s)")
        return True


def get_email_service(config: Settings = Depends(get_settings)) -> BrevoEmailService:
    """Email service dependency, overridable in tests"""
    return BrevoEmailService(config)
