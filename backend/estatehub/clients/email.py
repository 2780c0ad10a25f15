"""
Transactional email clients
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from estatehub.core.config import Settings
from estatehub.core.exceptions import ConfigurationError
from estatehub.core.logging import get_logger

logger = get_logger(__name__)


class EmailClient(ABC):
    """Sends a single HTML email and reports whether the provider took it"""

    @abstractmethod
    async def send(self, recipient_email: str, subject: str, html_content: str) -> bool:
        """Send an email, returning False instead of raising on delivery failure"""
        pass

    async def aclose(self) -> None:
        """Release any held connections"""
        pass


class LoggingEmailClient(EmailClient):
    """Writes notifications to the log instead of sending them"""

    async def send(self, recipient_email: str, subject: str, html_content: str) -> bool:
        logger.info("Email notification (log only)", recipient=recipient_email, subject=subject)
        return True


class BrevoEmailClient(EmailClient):
    """Client for the Brevo (Sendinblue) v3 SMTP email API"""

    SUCCESS_CODES = (200, 201)

    def __init__(
        self,
        api_url: str,
        api_key: str,
        sender_email: str,
        sender_name: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("BREVO_API_KEY is required when email delivery is enabled")
        self.api_url = api_url
        self.sender_email = sender_email
        self.sender_name = sender_name
        self.client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            headers={
                "accept": "application/json",
                "api-key": api_key,
                "content-type": "application/json",
            },
        )

    def build_payload(self, recipient_email: str, subject: str, html_content: str) -> Dict[str, Any]:
        return {
            "sender": {"name": self.sender_name, "email": self.sender_email},
            "to": [{"email": recipient_email, "name": "Buyer"}],
            "subject": subject,
            "htmlContent": html_content,
        }

    async def send(self, recipient_email: str, subject: str, html_content: str) -> bool:
        payload = self.build_payload(recipient_email, subject, html_content)
        try:
            response = await self.client.post(self.api_url, json=payload)
        except httpx.HTTPError as e:
            logger.error("Error sending email via Brevo API", recipient=recipient_email, error=str(e))
            return False

        if response.status_code not in self.SUCCESS_CODES:
            logger.warning("Email rejected by provider",
                           recipient=recipient_email,
                           status_code=response.status_code,
                           body=response.text[:500])
            return False

        logger.info("Email sent via Brevo API", recipient=recipient_email, subject=subject)
        return True

    async def aclose(self) -> None:
        await self.client.aclose()


def build_email_client(settings: Settings) -> EmailClient:
    """Pick the email client for the current settings"""
    if not settings.EMAIL_ENABLED:
        return LoggingEmailClient()
    return BrevoEmailClient(
        api_url=settings.BREVO_API_URL,
        api_key=settings.BREVO_API_KEY,
        sender_email=settings.EMAIL_SENDER_ADDRESS,
        sender_name=settings.EMAIL_SENDER_NAME,
        timeout=settings.EMAIL_TIMEOUT_SECONDS,
    )
