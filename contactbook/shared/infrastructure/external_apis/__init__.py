# 📄 File: contactbook/shared/infrastructure/external_apis/__init__.py

# 🧭 Purpose (Layman Explanation):
# This file sets up the foundation for talking to outside services, which for the
# contact book means the email provider.

# 🧪 Purpose (Technical Summary):
# Initializes external API infrastructure: the EmailClient abstraction with its SendGrid
# and console implementations.

# 🔗 Dependencies:
# - email_client: aiohttp + tenacity delivery clients

# 🔄 Connected Modules / Calls From:
# Used by: contactbook.main (client construction), user_management verification mailer

from .email_client import (
    ConsoleEmailClient,
    EmailClient,
    EmailMessage,
    SendGridEmailClient,
    create_email_client,
)

__all__ = [
    "ConsoleEmailClient",
    "EmailClient",
    "EmailMessage",
    "SendGridEmailClient",
    "create_email_client",
]
