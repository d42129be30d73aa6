# 📄 File: contactbook/modules/contacts/domain/services/contact_service.py
# 🧭 Purpose (Layman Explanation):
# The rules for an address book: list, read, add, change, star and remove your own contacts.
# 🧪 Purpose (Technical Summary):
# Domain service implementing owner-scoped contact CRUD. The owner always comes from the
# authenticated identity, never from client input.
# 🔗 Dependencies:
# Contact model, ContactRepository, shared exceptions
# 🔄 Connected Modules / Calls From:
# contacts API endpoints (presentation/api/v1/contacts.py)

import logging
from typing import Any, Dict, List, Optional

from ..models.contact import Contact
from ..repositories.contact_repository import ContactRepository
from contactbook.shared.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class ContactService:
    """
    Domain service for contact management.

    Business rules:
    - A contact is visible and mutable only for its owner
    - Another owner's contact is reported exactly like a missing one
    - Updates must change at least one field
    """

    def __init__(self, contact_repository: ContactRepository):
        self.contact_repository = contact_repository

    async def list_contacts(
        self,
        owner_id: str,
        page: int = 1,
        limit: int = 20,
        favorite: Optional[bool] = None,
    ) -> List[Contact]:
        offset = (page - 1) * limit
        return await self.contact_repository.list_for_owner(
            owner_id, offset=offset, limit=limit, favorite=favorite
        )

    async def get_contact(self, owner_id: str, contact_id: str) -> Contact:
        contact = await self.contact_repository.get_for_owner(contact_id, owner_id)
        if contact is None:
            raise NotFoundError("Not found", resource_type="contact", resource_id=contact_id)
        return contact

    async def create_contact(self, owner_id: str, data: Dict[str, Any]) -> Contact:
        """
        Create a contact owned by ``owner_id``.

        Args:
            owner_id: Authenticated user id
            data: Validated contact fields (name, email, phone, favorite, avatar_url)

        Returns:
            Contact: The stored contact
        """
        contact = Contact(owner_id=owner_id, **data)
        contact = await self.contact_repository.create(contact)
        logger.info(f"Contact {contact.contact_id} created for user {owner_id}")
        return contact

    async def update_contact(self, owner_id: str, contact_id: str, changes: Dict[str, Any]) -> Contact:
        """
        Apply a partial update.

        Raises:
            ValidationError: If ``changes`` is empty
            NotFoundError: If the contact is not the caller's
        """
        if not changes:
            raise ValidationError("missing fields")

        contact = await self.get_contact(owner_id, contact_id)
        try:
            contact.apply_changes(changes)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        contact = await self.contact_repository.update(contact)
        logger.info(f"Contact {contact_id} updated for user {owner_id}")
        return contact

    async def set_favorite(self, owner_id: str, contact_id: str, favorite: bool) -> Contact:
        contact = await self.get_contact(owner_id, contact_id)
        contact.set_favorite(favorite)
        return await self.contact_repository.update(contact)

    async def delete_contact(self, owner_id: str, contact_id: str) -> None:
        deleted = await self.contact_repository.delete_for_owner(contact_id, owner_id)
        if not deleted:
            raise NotFoundError("Not found", resource_type="contact", resource_id=contact_id)
        logger.info(f"Contact {contact_id} deleted for user {owner_id}")
