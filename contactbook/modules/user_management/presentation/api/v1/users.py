# 📄 File: contactbook/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# This file contains the web endpoints for accounts: signing up, confirming an email address,
# logging in and out, looking at your own profile, changing plan and uploading a picture.
#
# 🧪 Purpose (Technical Summary):
# FastAPI users endpoints wiring request parsing, session authentication and rate limiting
# to the AuthService and AvatarService domain services.
#
# 🔗 Dependencies:
# - FastAPI router, status codes, UploadFile
# - contactbook.modules.user_management.presentation.dependencies (authenticator, services)
# - contactbook.modules.user_management.presentation.api.schemas.user_schemas
# - rate limit dependency (contactbook.shared.core.rate_limiter)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.main (router inclusion under API_PREFIX)

"""
Users API Endpoints

Endpoints:
- POST   /users/signup          register and send a verification email
- GET    /users/verify/{token}  redeem a verification link
- POST   /users/verify-resend   send a fresh verification link
- POST   /users/login           open a session, returns the session token
- GET    /users/logout          close the current session
- GET    /users/current         profile of the authenticated user
- PATCH  /users                 change subscription tier
- PATCH  /users/avatars         upload a new avatar image
"""

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, File, Response, UploadFile, status

from contactbook.modules.user_management.domain.models.user import User
from contactbook.modules.user_management.domain.services.auth_service import AuthService
from contactbook.modules.user_management.domain.services.avatar_service import AvatarService
from contactbook.modules.user_management.presentation.api.schemas.user_schemas import (
    AvatarResponse,
    CredentialsRequest,
    LoginResponse,
    LoginUserResponse,
    MessageResponse,
    RegisterResponse,
    ResendVerificationRequest,
    SubscriptionResponse,
    SubscriptionUpdateRequest,
    UserProfileResponse,
)
from contactbook.modules.user_management.presentation.dependencies import (
    get_app_settings,
    get_auth_service,
    get_avatar_service,
    get_current_user,
    get_token_identity,
)
from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import ValidationError
from contactbook.shared.core.rate_limiter import enforce_auth_rate_limit
from contactbook.shared.utils.formatters import parse_model

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["Users"])


def _parse_credentials(payload: Any, settings: Settings) -> CredentialsRequest:
    credentials, error = parse_model(
        CredentialsRequest,
        payload,
        context={"allowed_tlds": settings.allowed_email_tlds},
    )
    if error:
        raise ValidationError(error)
    return credentials


# =========================================================================
# REGISTRATION & VERIFICATION
# =========================================================================

@users_router.post(
    "/signup",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user account",
    dependencies=[Depends(enforce_auth_rate_limit)],
    responses={
        400: {"description": "Invalid registration data"},
        409: {"description": "Email in use"},
        429: {"description": "Too many registration attempts"},
    },
)
async def signup(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> RegisterResponse:
    """
    Register a new user.

    A duplicate email is reported as 409 whatever else is wrong with the
    body; shape errors are reported as 400 otherwise.
    """
    email = payload.get("email") if isinstance(payload, dict) else None
    if isinstance(email, str) and email.strip():
        await auth_service.ensure_email_available(email)

    credentials = _parse_credentials(payload, settings)
    user = await auth_service.register(
        email=credentials.email,
        password=credentials.password,
        subscription=credentials.subscription,
    )
    return RegisterResponse(user=UserProfileResponse(**user.to_public_dict()))


@users_router.get(
    "/verify/{verification_token}",
    response_model=MessageResponse,
    summary="Verify email address",
    responses={404: {"description": "User not found or already verified"}},
)
async def verify_email(
    verification_token: str,
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    await auth_service.verify_email(verification_token)
    return MessageResponse(message="Verification successful")


@users_router.post(
    "/verify-resend",
    response_model=MessageResponse,
    summary="Resend verification email",
    responses={
        400: {"description": "Missing email or already verified"},
        404: {"description": "User not found"},
    },
)
async def resend_verification(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    auth_service: AuthService = Depends(get_auth_service),
) -> MessageResponse:
    body, error = parse_model(ResendVerificationRequest, payload)
    if error or not body.email:
        raise ValidationError("missing required field email", field="email")

    await auth_service.resend_verification(body.email)
    return MessageResponse(message="Verification email sent")


# =========================================================================
# SESSION
# =========================================================================

@users_router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in with email and password",
    dependencies=[Depends(enforce_auth_rate_limit)],
    responses={
        400: {"description": "Invalid login data"},
        401: {"description": "Unknown email or incorrect password"},
        429: {"description": "Too many login attempts"},
    },
)
async def login(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> LoginResponse:
    credentials = _parse_credentials(payload, settings)
    user, token = await auth_service.login(credentials.email, credentials.password)
    return LoginResponse(
        token=token,
        user=LoginUserResponse(email=user.email, subscription=user.subscription),
    )


@users_router.get(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Log out the current session",
)
async def logout(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> Response:
    await auth_service.logout(current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@users_router.get(
    "/current",
    response_model=UserProfileResponse,
    summary="Get the authenticated user",
)
async def current(
    current_user: User = Depends(get_current_user),
    auth_service: AuthService = Depends(get_auth_service),
) -> UserProfileResponse:
    user = auth_service.current_profile(current_user)
    return UserProfileResponse(**user.to_public_dict())


# =========================================================================
# ACCOUNT UPDATES
# =========================================================================

@users_router.patch(
    "",
    response_model=SubscriptionResponse,
    summary="Change subscription tier",
    responses={
        400: {"description": "Invalid subscription type"},
        401: {"description": "Not authorized"},
    },
)
async def update_subscription(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    user_id: str = Depends(get_token_identity),
    auth_service: AuthService = Depends(get_auth_service),
) -> SubscriptionResponse:
    body, error = parse_model(SubscriptionUpdateRequest, payload)
    if error:
        raise ValidationError("Invalid subscription type", field="subscription")

    user = await auth_service.update_subscription(user_id, body.subscription)
    return SubscriptionResponse(email=user.email, subscription=user.subscription)


@users_router.patch(
    "/avatars",
    response_model=AvatarResponse,
    summary="Upload a new avatar",
    responses={
        400: {"description": "Missing file or unsupported image type"},
        404: {"description": "User not found"},
    },
)
async def update_avatar(
    current_user: User = Depends(get_current_user),
    avatar: Optional[UploadFile] = File(default=None),
    avatar_service: AvatarService = Depends(get_avatar_service),
) -> AvatarResponse:
    if avatar is None or not avatar.filename:
        raise ValidationError("missing file field avatar", field="avatar")

    try:
        # Spooled uploads know their size, so oversized files are refused unread
        if avatar.size is not None:
            avatar_service.check_intake(avatar.filename, avatar.size)
        data = await avatar.read()
    finally:
        await avatar.close()

    avatar_url = await avatar_service.update_avatar(current_user.user_id, avatar.filename, data)
    return AvatarResponse(avatar_url=avatar_url)
