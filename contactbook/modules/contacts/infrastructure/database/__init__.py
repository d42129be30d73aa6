from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.contacts.infrastructure.database.models import ContactModel
    from contactbook.modules.contacts.infrastructure.database.contact_repository_impl import ContactRepositoryImpl

__all__ = [
    "ContactModel",
    "ContactRepositoryImpl",
]
