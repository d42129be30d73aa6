# 📄 File: contactbook/modules/contacts/infrastructure/database/contact_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file handles the database work for contacts, always filtering by the account that owns them.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of the ContactRepository interface. Every query carries the
# owner id in its WHERE clause; writes commit before returning.
#
# 🔗 Dependencies:
# - contactbook.modules.contacts.domain (model and repository interface)
# - contactbook.modules.contacts.infrastructure.database.models (ContactModel)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - contactbook.modules.contacts.presentation.api.v1.contacts (via service factory)

import logging
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.modules.contacts.domain.models.contact import Contact
from contactbook.modules.contacts.domain.repositories.contact_repository import ContactRepository
from contactbook.modules.contacts.infrastructure.database.models import ContactModel
from contactbook.shared.core.exceptions import DatabaseError, NotFoundError

logger = logging.getLogger(__name__)


class ContactRepositoryImpl(ContactRepository):
    """
    SQLAlchemy implementation of the ContactRepository interface.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def create(self, contact: Contact) -> Contact:
        try:
            contact_model = self._domain_to_model(contact)
            self._session.add(contact_model)
            await self._session.commit()

            logger.debug(f"Created contact with ID: {contact_model.contact_id}")
            return self._model_to_domain(contact_model)

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during contact creation: {str(e)}")
            raise DatabaseError(f"Failed to create contact: {str(e)}") from e

    async def get_for_owner(self, contact_id: str, owner_id: str) -> Optional[Contact]:
        try:
            contact_model = await self._get_model(contact_id, owner_id)
        except SQLAlchemyError as e:
            logger.error(f"Database error retrieving contact {contact_id}: {str(e)}")
            raise DatabaseError(f"Failed to retrieve contact: {str(e)}") from e

        if contact_model is None:
            return None
        return self._model_to_domain(contact_model)

    async def list_for_owner(
        self,
        owner_id: str,
        offset: int = 0,
        limit: int = 20,
        favorite: Optional[bool] = None,
    ) -> List[Contact]:
        """
        List contacts of an owner with pagination.

        Args:
            owner_id: Owner whose contacts are listed
            offset: Number of contacts to skip
            limit: Maximum number of contacts returned
            favorite: Optional favorite filter

        Returns:
            List[Contact]: Contacts ordered by creation time
        """
        stmt = select(ContactModel).where(ContactModel.owner_id == owner_id)
        if favorite is not None:
            stmt = stmt.where(ContactModel.favorite == favorite)
        stmt = (
            stmt.order_by(ContactModel.created_at, ContactModel.contact_id)
            .offset(offset)
            .limit(limit)
        )

        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as e:
            logger.error(f"Database error listing contacts of {owner_id}: {str(e)}")
            raise DatabaseError(f"Failed to list contacts: {str(e)}") from e

        return [self._model_to_domain(row) for row in result.scalars().all()]

    async def update(self, contact: Contact) -> Contact:
        try:
            contact_model = await self._get_model(contact.contact_id, contact.owner_id)
            if contact_model is None:
                raise NotFoundError("Not found", resource_type="contact", resource_id=contact.contact_id)

            contact_model.name = contact.name
            contact_model.email = contact.email
            contact_model.phone = contact.phone
            contact_model.favorite = contact.favorite
            contact_model.avatar_url = contact.avatar_url
            contact_model.updated_at = contact.updated_at
            await self._session.commit()

            return self._model_to_domain(contact_model)

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error updating contact {contact.contact_id}: {str(e)}")
            raise DatabaseError(f"Failed to update contact: {str(e)}") from e

    async def delete_for_owner(self, contact_id: str, owner_id: str) -> bool:
        stmt = delete(ContactModel).where(
            ContactModel.contact_id == contact_id,
            ContactModel.owner_id == owner_id,
        )
        try:
            result = await self._session.execute(stmt)
            await self._session.commit()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error deleting contact {contact_id}: {str(e)}")
            raise DatabaseError(f"Failed to delete contact: {str(e)}") from e

        return result.rowcount > 0

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    async def _get_model(self, contact_id: str, owner_id: str) -> Optional[ContactModel]:
        stmt = select(ContactModel).where(
            ContactModel.contact_id == contact_id,
            ContactModel.owner_id == owner_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _domain_to_model(self, contact: Contact) -> ContactModel:
        return ContactModel(
            contact_id=contact.contact_id,
            owner_id=contact.owner_id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            favorite=contact.favorite,
            avatar_url=contact.avatar_url,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
        )

    def _model_to_domain(self, contact_model: ContactModel) -> Contact:
        return Contact(
            contact_id=contact_model.contact_id,
            owner_id=contact_model.owner_id,
            name=contact_model.name,
            email=contact_model.email,
            phone=contact_model.phone,
            favorite=bool(contact_model.favorite),
            avatar_url=contact_model.avatar_url,
            created_at=contact_model.created_at,
            updated_at=contact_model.updated_at,
        )
