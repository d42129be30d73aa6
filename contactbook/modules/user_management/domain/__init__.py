# 📄 File: contactbook/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The core rules for accounts: what a user is, how sessions and email confirmation work.
# 🧪 Purpose (Technical Summary):
# Domain layer initialization: User entity, repository interface and domain services.
# 🔗 Dependencies:
# Domain models, services, repositories from subpackages
# 🔄 Connected Modules / Calls From:
# Infrastructure layer, presentation layer

"""
User Management Domain Layer

Business rules enforced:
- Email uniqueness
- Verification flips exactly once and consumes its token
- At most one live session per user (a new login replaces the stored token)
"""

from .models.user import SubscriptionTier, User
from .repositories.user_repository import UserRepository

__all__ = [
    "User",
    "SubscriptionTier",
    "UserRepository",
]
