# 📄 File: contactbook/modules/contacts/presentation/api/v1/contacts.py
# 🧭 Purpose (Layman Explanation):
# This file contains the web endpoints of the address book: list, read, add, change,
# star and remove the contacts of the logged-in user.
#
# 🧪 Purpose (Technical Summary):
# FastAPI contacts CRUD endpoints. Every route requires session authentication and is
# scoped to the authenticated user; the owner is never read from the request.
#
# 🔗 Dependencies:
# - FastAPI router, Query parameters, status codes
# - contactbook.modules.user_management.presentation.dependencies (session authenticator)
# - contactbook.modules.contacts.presentation.dependencies (ContactService)
#
# 🔄 Connected Modules / Calls From:
# - contactbook.main (router inclusion under API_PREFIX)

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from contactbook.modules.contacts.domain.services.contact_service import ContactService
from contactbook.modules.contacts.presentation.api.schemas.contact_schemas import (
    ContactCreateRequest,
    ContactResponse,
    ContactUpdateRequest,
    FavoriteUpdateRequest,
)
from contactbook.modules.contacts.presentation.dependencies import get_contact_service
from contactbook.modules.user_management.domain.models.user import User
from contactbook.modules.user_management.presentation.api.schemas.user_schemas import MessageResponse
from contactbook.modules.user_management.presentation.dependencies import get_current_user
from contactbook.shared.core.exceptions import ValidationError
from contactbook.shared.utils.formatters import parse_model

logger = logging.getLogger(__name__)

contacts_router = APIRouter(prefix="/contacts", tags=["Contacts"])

NOT_FOUND_RESPONSE = {404: {"description": "Not found"}}


@contacts_router.get(
    "",
    response_model=List[ContactResponse],
    summary="List own contacts",
)
async def list_contacts(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(20, ge=1, le=100, description="Contacts per page"),
    favorite: Optional[bool] = Query(None, description="Filter by favorite flag"),
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> List[ContactResponse]:
    contacts = await contact_service.list_contacts(
        current_user.user_id, page=page, limit=limit, favorite=favorite
    )
    return [ContactResponse.from_domain(contact) for contact in contacts]


@contacts_router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Get one contact",
    responses=NOT_FOUND_RESPONSE,
)
async def get_contact(
    contact_id: str,
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    contact = await contact_service.get_contact(current_user.user_id, contact_id)
    return ContactResponse.from_domain(contact)


@contacts_router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a contact",
)
async def create_contact(
    contact_data: ContactCreateRequest,
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    contact = await contact_service.create_contact(current_user.user_id, contact_data.model_dump())
    return ContactResponse.from_domain(contact)


@contacts_router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Update a contact",
    responses={400: {"description": "missing fields"}, **NOT_FOUND_RESPONSE},
)
async def update_contact(
    contact_id: str,
    contact_data: ContactUpdateRequest,
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    changes = contact_data.model_dump(exclude_unset=True)
    contact = await contact_service.update_contact(current_user.user_id, contact_id, changes)
    return ContactResponse.from_domain(contact)


@contacts_router.patch(
    "/{contact_id}/favorite",
    response_model=ContactResponse,
    summary="Mark or unmark a contact as favorite",
    responses={400: {"description": "missing field favorite"}, **NOT_FOUND_RESPONSE},
)
async def update_favorite(
    contact_id: str,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> ContactResponse:
    body, error = parse_model(FavoriteUpdateRequest, payload)
    if error:
        raise ValidationError("missing field favorite", field="favorite")

    contact = await contact_service.set_favorite(current_user.user_id, contact_id, body.favorite)
    return ContactResponse.from_domain(contact)


@contacts_router.delete(
    "/{contact_id}",
    response_model=MessageResponse,
    summary="Delete a contact",
    responses=NOT_FOUND_RESPONSE,
)
async def delete_contact(
    contact_id: str,
    current_user: User = Depends(get_current_user),
    contact_service: ContactService = Depends(get_contact_service),
) -> MessageResponse:
    await contact_service.delete_contact(current_user.user_id, contact_id)
    return MessageResponse(message="contact deleted")
