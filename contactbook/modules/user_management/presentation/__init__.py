# 📄 File: contactbook/modules/user_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file organizes the web-facing part of the account system.
#
# 🧪 Purpose (Technical Summary):
# Presentation layer initialization: FastAPI router, Pydantic schemas and the session
# authentication dependencies.
#
# 🔗 Dependencies:
# - FastAPI for HTTP endpoint routing and OpenAPI documentation
# - contactbook.modules.user_management.domain (services)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.api.v1.router (router inclusion)
# - contacts module (get_current_user)

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.user_management.presentation.api.v1.users import users_router
    from contactbook.modules.user_management.presentation.dependencies import (
        SessionAuthenticator,
        get_current_user,
        get_token_identity,
    )

__all__ = [
    "users_router",
    "SessionAuthenticator",
    "get_current_user",
    "get_token_identity",
]
