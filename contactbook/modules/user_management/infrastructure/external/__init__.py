# 📄 File: contactbook/modules/user_management/infrastructure/external/__init__.py
# 🧭 Purpose (Layman Explanation):
# Connections from the account system to outside services (email delivery).
# 🧪 Purpose (Technical Summary):
# External integrations of the user management module.
# 🔗 Dependencies:
# contactbook.shared.infrastructure.external_apis.email_client
# 🔄 Connected Modules / Calls From:
# AuthService via presentation dependencies

from .verification_mailer import VerificationMailer

__all__ = [
    "VerificationMailer",
]
