# 📄 File: contactbook/modules/user_management/domain/services/auth_service.py
# 🧭 Purpose (Layman Explanation):
# Handles signing up, proving email ownership, logging in and out, and switching plans.
# 🧪 Purpose (Technical Summary):
# Domain service implementing the registration/verification workflow and the session
# lifecycle: bcrypt credential checks, session and verification token issuance, and
# verification email dispatch.
# 🔗 Dependencies:
# Domain models, repositories, contactbook.shared.core.security, verification mailer
# 🔄 Connected Modules / Calls From:
# users API endpoints (presentation/api/v1/users.py), presentation dependencies

import logging
from typing import Tuple

from starlette.concurrency import run_in_threadpool

from ..models.user import SubscriptionTier, User
from ..repositories.user_repository import UserRepository
from contactbook.modules.user_management.infrastructure.external.verification_mailer import (
    VerificationMailer,
)
from contactbook.shared.config.settings import Settings
from contactbook.shared.core.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from contactbook.shared.core.security import SecurityManager, TokenType
from contactbook.shared.utils.helpers import gravatar_url

logger = logging.getLogger(__name__)


class AuthService:
    """
    Domain service for authentication business logic.

    Business rules:
    - Emails are unique; a duplicate registration is a conflict
    - A verification token is issued at signup and rotated on resend
    - Verification is one-shot: redeeming clears the token
    - Login issues a session token and stores it; only the stored token is accepted
    - Logout clears the stored token so earlier tokens stop working immediately
    - Login is not gated on the verified flag
    """

    def __init__(
        self,
        user_repository: UserRepository,
        security: SecurityManager,
        mailer: VerificationMailer,
        settings: Settings,
    ):
        self.user_repository = user_repository
        self.security = security
        self.mailer = mailer
        self.avatar_size = settings.AVATAR_SIZE

    # =========================================================================
    # REGISTRATION & VERIFICATION
    # =========================================================================

    async def ensure_email_available(self, email: str) -> None:
        """
        Raise ConflictError if ``email`` is already registered.

        Runs independently of input shape validation so that a duplicate
        email is reported as a conflict whatever else is wrong with the body.
        """
        if await self.user_repository.exists_by_email(email.strip()):
            logger.info(f"Registration rejected, email already registered: {email}")
            raise ConflictError("Email in use")

    async def register(
        self,
        email: str,
        password: str,
        subscription: SubscriptionTier = SubscriptionTier.STARTER,
    ) -> User:
        """
        Create an unverified account and send its verification email.

        Args:
            email: Validated email address
            password: Plain text password
            subscription: Initial subscription tier

        Returns:
            User: The persisted user

        Raises:
            ConflictError: If the email is taken (including a concurrent signup)
            ExternalServiceError: If the verification email cannot be delivered
        """
        await self.ensure_email_available(email)

        password_hash = await run_in_threadpool(self.security.get_password_hash, password)
        user = User(
            email=email,
            password_hash=password_hash,
            subscription=subscription,
            avatar_url=gravatar_url(email, size=self.avatar_size),
        )
        user.verification_token = self.security.create_token(user.user_id, TokenType.VERIFICATION)

        user = await self.user_repository.create(user)
        logger.info(f"User registered: {user.user_id}")

        await self.mailer.send_verification(user.email, user.verification_token)
        return user

    async def verify_email(self, token: str) -> User:
        """
        Redeem a verification token.

        The token must belong to a pending user and still carry a valid
        signature and expiry for that user.

        Raises:
            NotFoundError: Unknown, consumed, expired or foreign token
        """
        user = await self.user_repository.get_by_verification_token(token)
        if user is None or user.verified:
            logger.info("Verification attempted with unknown or consumed token")
            raise NotFoundError("User not found or already verified", resource_type="user")

        claims = self.security.decode_token(token, TokenType.VERIFICATION)
        if claims is None or claims["id"] != user.user_id:
            logger.warning(f"Verification token rejected for user {user.user_id}")
            raise NotFoundError("Verification link is invalid or expired", resource_type="user")

        user.mark_verified()
        user = await self.user_repository.update(user)
        logger.info(f"User verified: {user.user_id}")
        return user

    async def resend_verification(self, email: str) -> None:
        """
        Rotate the verification token of a pending user and email it again.

        Raises:
            ValidationError: Missing email or user already verified
            NotFoundError: No account for the email
        """
        if not email:
            raise ValidationError("missing required field email", field="email")

        user = await self.user_repository.get_by_email(email.strip())
        if user is None:
            raise NotFoundError("User not found", resource_type="user")
        if user.verified:
            raise ValidationError("Verification has already been passed")

        user.rotate_verification_token(
            self.security.create_token(user.user_id, TokenType.VERIFICATION)
        )
        user = await self.user_repository.update(user)
        logger.info(f"Verification token rotated for user {user.user_id}")

        await self.mailer.send_verification(user.email, user.verification_token)

    # =========================================================================
    # SESSION LIFECYCLE
    # =========================================================================

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Check credentials and open a session.

        A new login replaces any earlier session of the same user.

        Returns:
            Tuple of (User entity, session token)

        Raises:
            AuthenticationError: Unknown email or wrong password
        """
        user = await self.user_repository.get_by_email(email)
        if user is None:
            logger.info(f"Login failed, unknown email: {email}")
            raise AuthenticationError("User with this email doesn't exist")

        password_ok = await run_in_threadpool(
            self.security.verify_password, password, user.password_hash
        )
        if not password_ok:
            logger.info(f"Login failed, incorrect password for user {user.user_id}")
            raise AuthenticationError("Incorrect password")

        token = self.security.create_token(user.user_id, TokenType.SESSION)
        user.start_session(token)
        user = await self.user_repository.update(user)

        logger.info(f"User logged in: {user.user_id}")
        return user, token

    async def logout(self, user: User) -> None:
        user.end_session()
        await self.user_repository.update(user)
        logger.info(f"User logged out: {user.user_id}")

    def current_profile(self, user: User) -> User:
        """Return ``user`` if it still holds a session, else reject."""
        if not user.has_active_session():
            raise AuthenticationError()
        return user

    async def update_subscription(self, user_id: str, subscription: SubscriptionTier) -> User:
        """
        Change the subscription tier of a user.

        Raises:
            AuthenticationError: If the user no longer exists
        """
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise AuthenticationError()

        user.change_subscription(subscription)
        user = await self.user_repository.update(user)
        logger.info(f"Subscription of user {user.user_id} changed to {subscription.value}")
        return user
