# 📄 File: contactbook/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the data model of a user account.
# 🧪 Purpose (Technical Summary):
# Package initialization for domain models (User entity and SubscriptionTier enum).
# 🔗 Dependencies:
# pydantic base models
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, infrastructure layer

from .user import SubscriptionTier, User

__all__ = [
    "User",
    "SubscriptionTier",
]
