# 📄 File: contactbook/modules/contacts/domain/models/contact.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "contact" is: a name with optional email and phone, a favorite star,
# and the account it belongs to.
# 🧪 Purpose (Technical Summary):
# Domain model for the Contact entity. Every contact has exactly one immutable owner;
# visibility and mutation are scoped to that owner.
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid
# 🔄 Connected Modules / Calls From:
# contact_service.py, contact_repository.py, contact_repository_impl.py

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# Fields a client may change after creation
MUTABLE_FIELDS = ("name", "email", "phone", "favorite", "avatar_url")


class Contact(BaseModel):
    """
    Contact domain model.

    ``owner_id`` is set at creation from the authenticated identity and
    never changes.
    """

    model_config = ConfigDict(validate_assignment=True)

    contact_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    owner_id: str
    name: str = Field(..., min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    favorite: bool = False
    avatar_url: Optional[str] = None

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """
        Update mutable fields from ``changes``.

        Raises:
            ValueError: If a field is not mutable
        """
        unknown = set(changes) - set(MUTABLE_FIELDS)
        if unknown:
            raise ValueError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")

        for field, value in changes.items():
            setattr(self, field, value)
        self.updated_at = datetime.now(timezone.utc)

    def set_favorite(self, favorite: bool) -> None:
        self.favorite = favorite
        self.updated_at = datetime.now(timezone.utc)

    def __str__(self) -> str:
        return f"Contact({self.contact_id}, {self.name})"
