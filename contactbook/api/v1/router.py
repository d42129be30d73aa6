# 📄 File: contactbook/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# This file acts like a traffic director for API requests, sending account requests to the
# account handlers and address book requests to the contacts handlers.
# 🧪 Purpose (Technical Summary):
# API router aggregation that combines the module routers under the configured API prefix.
# 🔗 Dependencies:
# FastAPI, contactbook.api.v1.health, module presentation routers
# 🔄 Connected Modules / Calls From:
# contactbook.main

import logging

from fastapi import APIRouter

from contactbook.modules.contacts.presentation.api.v1.contacts import contacts_router
from contactbook.modules.user_management.presentation.api.v1.users import users_router

from .health import health_router

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    400: {"description": "Bad Request - Invalid input data"},
    401: {"description": "Unauthorized - Authentication required"},
    500: {"description": "Internal Server Error"},
}


def create_api_router(api_prefix: str) -> APIRouter:
    """
    Create the application API router.

    Args:
        api_prefix: Prefix for every module route (e.g. "/api")

    Returns:
        APIRouter: Module routers under ``api_prefix`` plus root level health checks
    """
    api_router = APIRouter()

    api_router.include_router(health_router, tags=["Health Check"])

    module_router = APIRouter(prefix=api_prefix.rstrip("/"), responses=ERROR_RESPONSES)
    module_router.include_router(users_router)
    module_router.include_router(contacts_router)
    api_router.include_router(module_router)

    logger.debug(f"API routes registered under {api_prefix}")
    return api_router
