# 📄 File: contactbook/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the contract for storing and finding user accounts.
# 🧪 Purpose (Technical Summary):
# Package initialization for repository interfaces (dependency inversion for the credential store).
# 🔗 Dependencies:
# Repository interface classes, domain models
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations

from .user_repository import UserRepository

__all__ = [
    "UserRepository",
]
