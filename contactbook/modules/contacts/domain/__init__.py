# 📄 File: contactbook/modules/contacts/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The rules of the address book, independent of how contacts are stored or served.
# 🧪 Purpose (Technical Summary):
# Contacts domain layer: entity, repository interface and domain service.
# 🔗 Dependencies:
# Domain models, repositories, services subpackages
# 🔄 Connected Modules / Calls From:
# Infrastructure and presentation layers of the contacts module

from .models.contact import Contact
from .repositories.contact_repository import ContactRepository
from .services.contact_service import ContactService

__all__ = [
    "Contact",
    "ContactRepository",
    "ContactService",
]
