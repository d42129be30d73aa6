# 📄 File: contactbook/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# This file defines the shapes of the messages clients send to sign up, log in and change
# their plan, and the shapes of the answers they get back.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for the users endpoints. Credential requests validate
# email format against the configured top-level domain allow-list passed in the
# validation context.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
# - contactbook.shared.utils.validators (email rules)
# - contactbook.modules.user_management.domain.models.user (SubscriptionTier)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.modules.user_management.presentation.api.v1.users (users endpoints)

"""
Users API Schemas

Request Schemas:
- CredentialsRequest: signup and login body (email, password, subscription?)
- ResendVerificationRequest: verification resend body
- SubscriptionUpdateRequest: subscription change body

Response Schemas:
- UserProfileResponse / RegisterResponse: public profile fields
- LoginResponse: session token plus email and subscription
- SubscriptionResponse, AvatarResponse, MessageResponse

Credential requests need ``{"allowed_tlds": [...]}`` in the validation
context; without it the default ``com``/``net`` allow-list applies.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from contactbook.modules.user_management.domain.models.user import SubscriptionTier
from contactbook.shared.utils.validators import validate_email_address

DEFAULT_ALLOWED_TLDS = ("com", "net")


# =============================================================================
# REQUESTS
# =============================================================================

class CredentialsRequest(BaseModel):
    """Body of signup and login."""

    email: str = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Plain text password")
    subscription: SubscriptionTier = Field(
        default=SubscriptionTier.STARTER,
        description="Initial subscription tier (signup only)",
    )

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str, info: ValidationInfo) -> str:
        v = v.strip()
        allowed = (info.context or {}).get("allowed_tlds", DEFAULT_ALLOWED_TLDS)
        result = validate_email_address(v, allowed)
        if not result.is_valid:
            raise ValueError(result.message)
        return v


class ResendVerificationRequest(BaseModel):
    email: Optional[str] = None


class SubscriptionUpdateRequest(BaseModel):
    subscription: SubscriptionTier


# =============================================================================
# RESPONSES
# =============================================================================

class UserProfileResponse(BaseModel):
    """Public profile of the account holder."""

    model_config = ConfigDict(populate_by_name=True)

    email: str
    subscription: SubscriptionTier
    avatar_url: str = Field(..., alias="avatarUrl")


class RegisterResponse(BaseModel):
    user: UserProfileResponse


class LoginUserResponse(BaseModel):
    email: str
    subscription: SubscriptionTier


class LoginResponse(BaseModel):
    token: str
    user: LoginUserResponse


class SubscriptionResponse(BaseModel):
    email: str
    subscription: SubscriptionTier


class AvatarResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    avatar_url: str = Field(..., alias="avatarUrl")


class MessageResponse(BaseModel):
    message: str
