# 📄 File: contactbook/shared/infrastructure/external_apis/email_client.py

# 🧭 Purpose (Layman Explanation):
# The outgoing mailbox of the service: hands messages to the email provider and reports
# loudly when a message could not be delivered.

# 🧪 Purpose (Technical Summary):
# Async email delivery clients. SendGrid v3 HTTP client built on aiohttp with tenacity
# retries on transport errors, and a console client that only logs (development).

# 🔗 Dependencies:
# - aiohttp: Async HTTP client
# - tenacity: Retry with exponential backoff
# - contactbook.shared.config.settings: provider credentials and timeouts

# 🔄 Connected Modules / Calls From:
# contactbook.main (client construction), user_management verification mailer

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict

import aiohttp
from aiohttp import ClientTimeout
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import ExternalServiceError
from contactbook.shared.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    """A single outgoing message."""
    to: str
    subject: str
    html: str
    text: str = ""


class EmailClient(ABC):
    """Delivery interface; implementations raise ExternalServiceError on failure."""

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver ``message`` or raise."""

    async def close(self) -> None:
        """Release network resources."""


class ConsoleEmailClient(EmailClient):
    """Writes messages to the log instead of sending them."""

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            f"Email to {message.to}: {message.subject}",
            extra={"email_body": message.text or message.html},
        )


class SendGridEmailClient(EmailClient):
    """
    SendGrid v3 mail/send client.

    Transport errors and timeouts are retried; any non-2xx answer is final
    and surfaces as ExternalServiceError.
    """

    def __init__(self, settings: Settings):
        self.api_key = settings.SENDGRID_API_KEY
        self.api_url = settings.SENDGRID_API_URL
        self.from_address = settings.EMAIL_FROM_ADDRESS
        self.from_name = settings.EMAIL_FROM_NAME
        self.timeout = ClientTimeout(total=settings.EMAIL_TIMEOUT_SECONDS)
        self.max_attempts = max(1, settings.EMAIL_MAX_RETRIES)
        self._session: aiohttp.ClientSession | None = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    def _build_payload(self, message: EmailMessage) -> Dict[str, Any]:
        content = []
        if message.text:
            content.append({"type": "text/plain", "value": message.text})
        content.append({"type": "text/html", "value": message.html})
        return {
            "personalizations": [{"to": [{"email": message.to}]}],
            "from": {"email": self.from_address, "name": self.from_name},
            "subject": message.subject,
            "content": content,
        }

    async def send(self, message: EmailMessage) -> None:
        if not self.api_key:
            raise ExternalServiceError("Email provider is not configured", service_name="sendgrid")

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_attempts),
                wait=wait_exponential(multiplier=0.5, max=5),
                retry=retry_if_exception_type((aiohttp.ClientError, asyncio.TimeoutError)),
                before_sleep=before_sleep_log(logger, logging.WARNING),
                reraise=True,
            ):
                with attempt:
                    await self._post(message)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Email delivery to {message.to} failed: {e}")
            raise ExternalServiceError("Email delivery failed", service_name="sendgrid") from e

        logger.info(f"Email sent to {message.to}: {message.subject}")

    async def _post(self, message: EmailMessage) -> None:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        session = self._get_session()
        async with session.post(self.api_url, json=self._build_payload(message), headers=headers) as response:
            if 200 <= response.status < 300:
                return
            body = await response.text()
            logger.error(f"SendGrid rejected message ({response.status}): {body[:500]}")
            raise ExternalServiceError(
                "Email delivery failed",
                service_name="sendgrid",
                status_code=response.status,
            )

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None


def create_email_client(settings: Settings) -> EmailClient:
    """Build the client selected by EMAIL_BACKEND."""
    if settings.EMAIL_BACKEND == "console":
        return ConsoleEmailClient()
    return SendGridEmailClient(settings)
