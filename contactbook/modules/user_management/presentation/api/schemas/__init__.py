# 📄 File: contactbook/modules/user_management/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the shapes of account requests and responses.
# 🧪 Purpose (Technical Summary):
# API schemas package providing Pydantic request/response models for the users endpoints.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# users endpoints, contacts endpoints (MessageResponse)

from .user_schemas import (
    AvatarResponse,
    CredentialsRequest,
    LoginResponse,
    MessageResponse,
    RegisterResponse,
    SubscriptionResponse,
    SubscriptionUpdateRequest,
    UserProfileResponse,
)

__all__ = [
    "AvatarResponse",
    "CredentialsRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterResponse",
    "SubscriptionResponse",
    "SubscriptionUpdateRequest",
    "UserProfileResponse",
]
