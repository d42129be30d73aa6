# 📄 File: contactbook/modules/user_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the account endpoints.
# 🧪 Purpose (Technical Summary):
# API version 1 package for user management routers.
# 🔗 Dependencies:
# FastAPI APIRouter
# 🔄 Connected Modules / Calls From:
# contactbook.api.v1.router

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.user_management.presentation.api.v1.users import users_router

__all__ = [
    "users_router",
]
