# 📄 File: contactbook/modules/contacts/presentation/api/schemas/contact_schemas.py
# 🧭 Purpose (Layman Explanation):
# The shapes of contact data going in and out of the contacts endpoints.
#
# 🧪 Purpose (Technical Summary):
# Pydantic request/response schemas for contacts CRUD. Update requests are partial:
# only fields the client sent are applied.
#
# 🔗 Dependencies:
# - pydantic for schema validation and serialization
#
# 🔄 Connected Modules / Calls From:
# - contactbook.modules.contacts.presentation.api.v1.contacts

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from contactbook.modules.contacts.domain.models.contact import Contact


class ContactCreateRequest(BaseModel):
    """Body of contact creation."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    favorite: bool = False
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl", max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('"name" must not be empty')
        return v


class ContactUpdateRequest(BaseModel):
    """Partial update; unset fields stay unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    favorite: Optional[bool] = None
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl", max_length=500)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError('"name" must not be null')
        v = v.strip()
        if not v:
            raise ValueError('"name" must not be empty')
        return v

    @field_validator("favorite")
    @classmethod
    def validate_favorite(cls, v: Optional[bool]) -> bool:
        if v is None:
            raise ValueError('"favorite" must be a boolean')
        return v


class FavoriteUpdateRequest(BaseModel):
    favorite: bool


class ContactResponse(BaseModel):
    """A contact as returned to its owner."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    favorite: bool
    avatar_url: Optional[str] = Field(default=None, alias="avatarUrl")
    owner: str

    @classmethod
    def from_domain(cls, contact: Contact) -> "ContactResponse":
        return cls(
            id=contact.contact_id,
            name=contact.name,
            email=contact.email,
            phone=contact.phone,
            favorite=contact.favorite,
            avatar_url=contact.avatar_url,
            owner=contact.owner_id,
        )
