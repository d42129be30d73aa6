# 📄 File: contactbook/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file sets up the infrastructure layer for user management, which handles how the service
# actually stores user data and sends account emails.
#
# 🧪 Purpose (Technical Summary):
# Infrastructure layer initialization: database model and repository implementation,
# verification email composition.
#
# 🔗 Dependencies:
# - contactbook.modules.user_management.domain.repositories (repository interfaces)
# - contactbook.shared.infrastructure (database, email client)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.modules.user_management.presentation (dependency injection)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
    from contactbook.modules.user_management.infrastructure.external.verification_mailer import VerificationMailer

__all__ = [
    "UserRepositoryImpl",
    "VerificationMailer",
]
