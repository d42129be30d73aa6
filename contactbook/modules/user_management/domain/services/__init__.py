# 📄 File: contactbook/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the services that sign users up, log them in and change their picture.
# 🧪 Purpose (Technical Summary):
# Package initialization for domain services orchestrating the auth and avatar workflows.
# 🔗 Dependencies:
# Domain models, repositories, shared security and storage
# 🔄 Connected Modules / Calls From:
# Presentation dependencies, API endpoints

from .auth_service import AuthService
from .avatar_service import AvatarService

__all__ = [
    "AuthService",
    "AvatarService",
]
