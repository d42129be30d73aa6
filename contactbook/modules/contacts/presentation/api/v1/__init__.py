from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contactbook.modules.contacts.presentation.api.v1.contacts import contacts_router

__all__ = ["contacts_router"]
