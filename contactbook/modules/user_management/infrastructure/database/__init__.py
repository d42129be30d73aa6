# 📄 File: contactbook/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes the database-related components for user accounts.
#
# 🧪 Purpose (Technical Summary):
# Database layer organization for user management: SQLAlchemy model and repository implementation.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM models and sessions
# - contactbook.modules.user_management.domain.repositories (interface definitions)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.shared.infrastructure.database.connection (table creation)
# - Alembic migrations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.user_management.infrastructure.database.models import UserModel
    from contactbook.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl

__all__ = [
    "UserModel",
    "UserRepositoryImpl",
]
