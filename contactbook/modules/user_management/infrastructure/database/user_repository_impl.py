# 📄 File: contactbook/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# The account ledger: stores new sign-ups and finds people by id, email or pending
# verification link, then saves their login, plan, picture and verification changes.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async UserRepository: maps users rows to the User entity, commits each write,
# writes only the columns a request changed, and turns a duplicate-email integrity error
# into ConflictError.
#
# 🔗 Dependencies:
# - contactbook.modules.user_management.domain.repositories.user_repository (interface)
# - contactbook.modules.user_management.domain.models.user (domain model)
# - contactbook.modules.user_management.infrastructure.database.models (SQLAlchemy models)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - contactbook.modules.user_management.domain.services (auth and avatar services)
# - contactbook.modules.user_management.presentation.dependencies (session authenticator)

"""
User Repository Implementation

Handles the mapping between domain User entities and UserModel rows. Every
write commits before returning so a follow-up request observes it.
"""

import logging
from typing import Any, Dict, Optional

from sqlalchemy import exists, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.modules.user_management.domain.models.user import SubscriptionTier, User
from contactbook.modules.user_management.domain.repositories.user_repository import UserRepository
from contactbook.modules.user_management.infrastructure.database.models import UserModel
from contactbook.shared.core.exceptions import ConflictError, DatabaseError, NotFoundError

logger = logging.getLogger(__name__)


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the user repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def create(self, user: User) -> User:
        """
        Create a new user in the database.

        Args:
            user: Domain User entity to create

        Returns:
            User: Created user entity

        Raises:
            ConflictError: If user with email already exists
            DatabaseError: For other database errors
        """
        try:
            user_model = self._domain_to_model(user)
            self._session.add(user_model)
            await self._session.commit()

            logger.info(f"Created user with ID: {user_model.user_id}")
            return self._model_to_domain(user_model)

        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"User creation failed - email already exists: {user.email}")
            raise ConflictError("Email in use") from e

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during user creation: {str(e)}")
            raise DatabaseError(f"Failed to create user: {str(e)}") from e

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Retrieve a user by their ID.

        Args:
            user_id: ID of the user to retrieve

        Returns:
            Optional[User]: User entity if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.user_id == user_id)
        return await self._fetch_one(stmt, f"id {user_id}")

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Retrieve a user by their email address.

        Args:
            email: Email address to search for

        Returns:
            Optional[User]: User entity if found, None otherwise
        """
        stmt = select(UserModel).where(UserModel.email == email)
        return await self._fetch_one(stmt, f"email {email}")

    async def get_by_verification_token(self, token: str) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.verification_token == token)
        return await self._fetch_one(stmt, "verification token")

    async def exists_by_email(self, email: str) -> bool:
        try:
            stmt = select(exists().where(UserModel.email == email))
            result = await self._session.execute(stmt)
            return bool(result.scalar())
        except SQLAlchemyError as e:
            logger.error(f"Database error checking email {email}: {str(e)}")
            raise DatabaseError(f"Failed to check email: {str(e)}") from e

    async def update(self, user: User) -> User:
        """
        Write the fields changed on ``user`` since it was loaded.

        Only those columns appear in the UPDATE, so a stale copy of the user
        never reverts what a concurrent request wrote (e.g. a logout).

        Args:
            user: Domain User entity with updated data

        Returns:
            User: The user as now stored

        Raises:
            NotFoundError: If user not found
            DatabaseError: For other database errors
        """
        changes = user.pending_changes()
        try:
            if changes:
                stmt = (
                    update(UserModel)
                    .where(UserModel.user_id == user.user_id)
                    .values(**self._changes_to_columns(changes))
                    .execution_options(synchronize_session=False)
                )
                result = await self._session.execute(stmt)
                if result.rowcount == 0:
                    await self._session.rollback()
                    raise NotFoundError("User not found", resource_type="user", resource_id=user.user_id)
                await self._session.commit()
                user.clear_changes()
                logger.info(f"Updated user {user.user_id}: {', '.join(changes)}")

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error updating user {user.user_id}: {str(e)}")
            raise DatabaseError(f"Failed to update user: {str(e)}") from e

        stmt = (
            select(UserModel)
            .where(UserModel.user_id == user.user_id)
            .execution_options(populate_existing=True)
        )
        stored = await self._fetch_one(stmt, f"id {user.user_id}")
        if stored is None:
            raise NotFoundError("User not found", resource_type="user", resource_id=user.user_id)
        return stored

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    async def _fetch_one(self, stmt, description: str) -> Optional[User]:
        try:
            result = await self._session.execute(stmt)
            user_model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving user by {description}: {str(e)}")
            raise DatabaseError(f"Failed to retrieve user: {str(e)}") from e

        if user_model is None:
            logger.debug(f"User not found by {description}")
            return None
        return self._model_to_domain(user_model)

    def _domain_to_model(self, user: User) -> UserModel:
        """Convert domain User entity to SQLAlchemy model."""
        return UserModel(
            user_id=user.user_id,
            email=user.email,
            password_hash=user.password_hash,
            subscription=user.subscription.value,
            session_token=user.session_token,
            verified=user.verified,
            verification_token=user.verification_token,
            avatar_url=user.avatar_url,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _model_to_domain(self, user_model: UserModel) -> User:
        """Convert SQLAlchemy model to domain User entity."""
        return User(
            user_id=user_model.user_id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            subscription=SubscriptionTier(user_model.subscription),
            session_token=user_model.session_token,
            verified=bool(user_model.verified),
            verification_token=user_model.verification_token,
            avatar_url=user_model.avatar_url or "",
            created_at=user_model.created_at,
            updated_at=user_model.updated_at,
        )

    @staticmethod
    def _changes_to_columns(changes: Dict[str, Any]) -> Dict[str, Any]:
        """Map changed domain fields to column values."""
        values = dict(changes)
        if "subscription" in values:
            values["subscription"] = SubscriptionTier(values["subscription"]).value
        return values
