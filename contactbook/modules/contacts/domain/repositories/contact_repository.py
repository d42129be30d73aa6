# 📄 File: contactbook/modules/contacts/domain/repositories/contact_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for saving and finding contacts, always on behalf of one account holder.
# 🧪 Purpose (Technical Summary):
# Repository interface for Contact entities. Every read and write is scoped by owner id,
# so a contact of another owner behaves exactly like a missing one.
# 🔗 Dependencies:
# Domain models (Contact), typing, abc
# 🔄 Connected Modules / Calls From:
# contact_service.py, contact_repository_impl.py

from abc import ABC, abstractmethod
from typing import List, Optional

from ..models.contact import Contact


class ContactRepository(ABC):
    """Repository interface for Contact data access."""

    @abstractmethod
    async def create(self, contact: Contact) -> Contact:
        """Persist a new contact."""

    @abstractmethod
    async def get_for_owner(self, contact_id: str, owner_id: str) -> Optional[Contact]:
        """Get a contact by id if it belongs to ``owner_id``."""

    @abstractmethod
    async def list_for_owner(
        self,
        owner_id: str,
        offset: int = 0,
        limit: int = 20,
        favorite: Optional[bool] = None,
    ) -> List[Contact]:
        """
        List contacts of an owner, oldest first.

        Args:
            owner_id: Owner whose contacts are listed
            offset: Number of contacts to skip
            limit: Maximum number of contacts returned
            favorite: Only contacts with this favorite flag, when given
        """

    @abstractmethod
    async def update(self, contact: Contact) -> Contact:
        """
        Persist every mutable field of ``contact``.

        Raises:
            NotFoundError: If the contact no longer exists for its owner
        """

    @abstractmethod
    async def delete_for_owner(self, contact_id: str, owner_id: str) -> bool:
        """Delete a contact of ``owner_id``; False when nothing matched."""
