# 📄 File: contactbook/modules/user_management/infrastructure/external/verification_mailer.py
# 🧭 Purpose (Layman Explanation):
# Writes and sends the "please confirm your email" message with the link a new user clicks.
# 🧪 Purpose (Technical Summary):
# Composes verification emails (subject, HTML and text bodies with the verification link)
# and hands them to the configured EmailClient. Delivery failures propagate unchanged.
# 🔗 Dependencies:
# contactbook.shared.infrastructure.external_apis.email_client, settings
# 🔄 Connected Modules / Calls From:
# auth_service.py (register, resend verification)

import logging
from html import escape

from contactbook.shared.config.settings import Settings
from contactbook.shared.infrastructure.external_apis.email_client import EmailClient, EmailMessage

logger = logging.getLogger(__name__)

VERIFICATION_SUBJECT = "Verify your email"


class VerificationMailer:
    """Sends verification links through an EmailClient."""

    def __init__(self, email_client: EmailClient, settings: Settings):
        self.email_client = email_client
        self.base_url = settings.APP_BASE_URL.rstrip("/")
        self.api_prefix = settings.API_PREFIX.rstrip("/")

    def build_link(self, token: str) -> str:
        return f"{self.base_url}{self.api_prefix}/users/verify/{token}"

    def build_message(self, email: str, token: str) -> EmailMessage:
        link = self.build_link(token)
        html = (
            "<p>Thanks for signing up.</p>"
            f'<p><a href="{escape(link)}">Click here to verify your email</a></p>'
        )
        text = f"Thanks for signing up. Verify your email: {link}"
        return EmailMessage(to=email, subject=VERIFICATION_SUBJECT, html=html, text=text)

    async def send_verification(self, email: str, token: str) -> None:
        """
        Dispatch a verification email.

        Raises:
            ExternalServiceError: If the provider rejects or cannot be reached
        """
        await self.email_client.send(self.build_message(email, token))
        logger.info(f"Verification email dispatched to {email}")
