# 📄 File: contactbook/modules/contacts/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands the contacts endpoints a ready-to-use contacts service for the current request.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency factories for the contacts module (repository bound to the
# request-scoped database session, ContactService).
# 🔗 Dependencies:
# FastAPI, contactbook.shared.infrastructure.database.session, contacts domain/infrastructure
# 🔄 Connected Modules / Calls From:
# contactbook.modules.contacts.presentation.api.v1.contacts

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from contactbook.modules.contacts.domain.repositories.contact_repository import ContactRepository
from contactbook.modules.contacts.domain.services.contact_service import ContactService
from contactbook.modules.contacts.infrastructure.database.contact_repository_impl import (
    ContactRepositoryImpl,
)
from contactbook.shared.infrastructure.database.session import get_db_session


async def get_contact_repository(session: AsyncSession = Depends(get_db_session)) -> ContactRepository:
    return ContactRepositoryImpl(session)


def get_contact_service(
    contact_repository: ContactRepository = Depends(get_contact_repository),
) -> ContactService:
    return ContactService(contact_repository)
