# 📄 File: contactbook/api/v1/health.py
# 🧭 Purpose (Layman Explanation):
# This file provides check-up endpoints that tell us whether the contact book is running and
# can still reach its database.
# 🧪 Purpose (Technical Summary):
# Health check endpoints for load balancers and monitoring: liveness and database readiness.
# 🔗 Dependencies:
# FastAPI, contactbook.shared.infrastructure.database.connection (via app.state)
# 🔄 Connected Modules / Calls From:
# contactbook.api.v1.router, monitoring systems, load balancers

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

health_router = APIRouter()


@health_router.get(
    "/health",
    summary="Health Check",
    description="Service status including database reachability",
)
async def health_check(request: Request) -> JSONResponse:
    """
    Health check endpoint

    Returns 200 when the database answers, 503 otherwise.
    """
    settings = request.app.state.settings
    database = await request.app.state.db_manager.health_check()
    healthy = database["status"] == "healthy"

    if not healthy:
        logger.warning(f"Health check degraded: {database.get('error')}")

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": "contactbook-api",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "components": {"database": database},
        },
    )


@health_router.get(
    "/health/live",
    summary="Liveness Probe",
    description="Kubernetes liveness probe endpoint",
)
async def liveness_probe() -> Response:
    return Response(status_code=200, content="OK")
