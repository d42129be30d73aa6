# 📄 File: contactbook/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save and find user accounts without specifying the actual
# database technology.
# 🧪 Purpose (Technical Summary):
# Repository interface (credential store) for User entities following the Repository pattern
# and dependency inversion principle.
# 🔗 Dependencies:
# Domain models (User), typing, abc
# 🔄 Connected Modules / Calls From:
# Domain services, infrastructure implementations, presentation dependencies

from abc import ABC, abstractmethod
from typing import Optional

from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - All operations are async for non-blocking I/O
    - Writes are durable when the call returns; update writes only changed fields
    """

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Create a new user.

        Raises:
            ConflictError: If a user with the email already exists
        """

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID, None when absent."""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email address, None when absent."""

    @abstractmethod
    async def get_by_verification_token(self, token: str) -> Optional[User]:
        """Get the user whose pending verification token equals ``token``."""

    @abstractmethod
    async def update(self, user: User) -> User:
        """
        Persist the fields changed on ``user`` (``User.pending_changes``).

        Raises:
            NotFoundError: If the user no longer exists
        """

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether an account is registered for ``email``."""
