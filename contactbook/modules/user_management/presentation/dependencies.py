# 📄 File: contactbook/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# This file provides the door checks for protected features: it reads the login pass a client
# presents, makes sure it is genuine and current, and works out whose account it belongs to.
# 🧪 Purpose (Technical Summary):
# FastAPI dependencies for session authentication (staged bearer-token pipeline with
# revocation-by-mismatch) and factories wiring repositories and domain services from the
# components stored on app.state.
# 🔗 Dependencies:
# FastAPI, contactbook.shared.core.security, contactbook.shared.infrastructure.database.session,
# user_management domain services and repository implementation
# 🔄 Connected Modules / Calls From:
# contactbook.modules.user_management.presentation.api.v1.users,
# contactbook.modules.contacts.presentation.api.v1.contacts

"""
User Management Module Dependencies

Session authentication runs as explicit sequential stages, each returning its
result or short-circuiting with a 401 "Not authorized":

1. extract   - bearer token from the Authorization header
2. validate  - signature and expiry with the session secret
3. resolve   - load the user named by the token claims
4. authorize - the presented token must equal the user's stored session token

On success the user is attached to ``request.state.user``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.modules.user_management.domain.models.user import User
from contactbook.modules.user_management.domain.repositories.user_repository import UserRepository
from contactbook.modules.user_management.domain.services.auth_service import AuthService
from contactbook.modules.user_management.domain.services.avatar_service import AvatarService
from contactbook.modules.user_management.infrastructure.database.user_repository_impl import (
    UserRepositoryImpl,
)
from contactbook.modules.user_management.infrastructure.external.verification_mailer import (
    VerificationMailer,
)
from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import AuthenticationError
from contactbook.shared.core.security import SecurityManager, TokenType
from contactbook.shared.infrastructure.database.session import get_db_session
from contactbook.shared.utils.logging import set_user_context

logger = logging.getLogger(__name__)

# Bearer scheme; missing credentials are handled by the authenticator, not FastAPI
bearer_scheme = HTTPBearer(auto_error=False)


# =========================================================================
# APPLICATION COMPONENTS
# =========================================================================

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepositoryImpl(session)


def get_auth_service(
    request: Request,
    user_repository: UserRepository = Depends(get_user_repository),
) -> AuthService:
    settings = request.app.state.settings
    mailer = VerificationMailer(request.app.state.email_client, settings)
    return AuthService(
        user_repository=user_repository,
        security=request.app.state.security,
        mailer=mailer,
        settings=settings,
    )


def get_avatar_service(
    request: Request,
    user_repository: UserRepository = Depends(get_user_repository),
) -> AvatarService:
    return AvatarService(
        user_repository=user_repository,
        file_manager=request.app.state.file_manager,
        settings=request.app.state.settings,
    )


# =========================================================================
# SESSION AUTHENTICATION
# =========================================================================

class SessionAuthenticator:
    """
    Resolves the authenticated user of a request or rejects it with 401.

    Every stage is a separate method so each check can be read, tested and
    logged on its own.
    """

    @staticmethod
    def extract_token(credentials: Optional[HTTPAuthorizationCredentials]) -> str:
        if credentials is None or not credentials.credentials:
            logger.info("Request rejected: missing bearer token")
            raise AuthenticationError()
        return credentials.credentials

    @staticmethod
    def validate_token(token: str, security: SecurityManager) -> Dict[str, Any]:
        claims = security.decode_token(token, TokenType.SESSION)
        if claims is None:
            logger.info("Request rejected: invalid or expired session token")
            raise AuthenticationError()
        return claims

    @staticmethod
    async def resolve_identity(claims: Dict[str, Any], user_repository: UserRepository) -> User:
        user = await user_repository.get_by_id(str(claims["id"]))
        if user is None:
            logger.info(f"Request rejected: token names unknown user {claims['id']}")
            raise AuthenticationError()
        return user

    @staticmethod
    def authorize(user: User, token: str) -> User:
        if not user.has_active_session(token):
            logger.info(f"Request rejected: token is not the live session of user {user.user_id}")
            raise AuthenticationError()
        return user

    async def __call__(
        self,
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
        user_repository: UserRepository = Depends(get_user_repository),
    ) -> User:
        token = self.extract_token(credentials)
        claims = self.validate_token(token, request.app.state.security)
        user = await self.resolve_identity(claims, user_repository)
        user = self.authorize(user, token)

        request.state.user = user
        set_user_context(user.user_id)
        return user


get_current_user = SessionAuthenticator()


async def get_token_identity(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Identify the caller from a signed session token without the session check.

    Only signature and expiry are verified, so a token revoked by logout is
    still accepted here. Used by the subscription update endpoint.
    """
    token = SessionAuthenticator.extract_token(credentials)
    claims = SessionAuthenticator.validate_token(token, request.app.state.security)
    return str(claims["id"])
