# 📄 File: contactbook/main.py
#
# 🧭 Purpose (Layman Explanation):
# The main control center that starts up the Contact Book service, connects the database,
# file storage and email sender together, and makes sure everything is ready to handle requests.
#
# 🧪 Purpose (Technical Summary):
# FastAPI application factory and entry point: builds the shared infrastructure once from
# injected Settings, stores it on app.state, registers exception handlers, middleware,
# routers and the public avatar mount, and manages startup and shutdown in the lifespan.
#
# 🔗 Dependencies:
# - FastAPI framework, uvicorn
# - contactbook.shared.config.settings
# - contactbook.shared.infrastructure (database, storage, email)
# - contactbook.api (middleware, routers)
#
# 🔄 Connected Modules / Calls From:
# - uvicorn server startup (factory mode)
# - Docker container entry point
# - tests (create_application with test settings)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from contactbook.api.middleware.error_handling import ErrorHandlingMiddleware
from contactbook.api.middleware.logging import RequestLoggingMiddleware
from contactbook.api.v1.router import create_api_router
from contactbook.shared.config.settings import Settings, get_settings
from contactbook.shared.core.exceptions import ContactBookException, ErrorKind, status_code_for
from contactbook.shared.core.rate_limiter import configure_rate_limiter
from contactbook.shared.core.security import SecurityManager
from contactbook.shared.infrastructure.database.connection import DatabaseConnectionManager
from contactbook.shared.infrastructure.database.session import DatabaseSessionManager
from contactbook.shared.infrastructure.external_apis.email_client import create_email_client
from contactbook.shared.infrastructure.storage.file_manager import FileManager
from contactbook.shared.utils.formatters import format_validation_errors
from contactbook.shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

HTTP_ERROR_CODES = {
    400: ErrorKind.VALIDATION.value,
    401: ErrorKind.UNAUTHORIZED.value,
    404: ErrorKind.NOT_FOUND.value,
    405: "METHOD_NOT_ALLOWED",
    429: ErrorKind.RATE_LIMITED.value,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database pool and session factory on startup; closes the
    email client and the pool on shutdown.
    """
    state = app.state
    logger.info(f"{state.settings.APP_NAME} starting up...")

    await state.db_manager.initialize()
    state.session_manager.initialize()
    logger.info("Database ready")

    # Leftovers from uploads interrupted by a previous process
    await state.file_manager.sweep_staging()

    logger.info("Startup complete")
    try:
        yield
    finally:
        logger.info(f"{state.settings.APP_NAME} shutting down...")
        try:
            await state.email_client.close()
        except Exception as e:
            logger.error(f"Email client shutdown error: {e}")
        await state.db_manager.close()
        logger.info("Shutdown complete")


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ContactBookException)
    async def contactbook_exception_handler(
        request: Request,
        exc: ContactBookException,
    ) -> JSONResponse:
        """Render classified application errors."""
        if exc.status_code >= 500:
            logger.error(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies, paths and queries are client errors (400)."""
        return JSONResponse(
            status_code=status_code_for(ErrorKind.VALIDATION),
            content={
                "message": format_validation_errors(exc.errors()),
                "code": ErrorKind.VALIDATION.value,
            },
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Framework level errors (unknown route, wrong method) in the common shape."""
        message = "Not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "message": message,
                "code": HTTP_ERROR_CODES.get(exc.status_code, f"HTTP_{exc.status_code}"),
            },
            headers=getattr(exc, "headers", None),
        )


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory function.

    Args:
        settings: Configuration to run with; loaded from the environment when omitted

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
        debug=settings.DEBUG,
    )

    # =========================================================================
    # SHARED INFRASTRUCTURE
    # =========================================================================

    db_manager = DatabaseConnectionManager(settings)
    file_manager = FileManager(settings)
    file_manager.ensure_directories()

    app.state.settings = settings
    app.state.security = SecurityManager(settings)
    app.state.db_manager = db_manager
    app.state.session_manager = DatabaseSessionManager(db_manager)
    app.state.file_manager = file_manager
    app.state.email_client = create_email_client(settings)
    app.state.limiter = configure_rate_limiter(settings)

    # =========================================================================
    # EXCEPTION HANDLERS
    # =========================================================================

    _register_exception_handlers(app)

    # =========================================================================
    # MIDDLEWARE CONFIGURATION (last added runs first)
    # =========================================================================

    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    # =========================================================================
    # ROUTER REGISTRATION
    # =========================================================================

    app.include_router(create_api_router(settings.API_PREFIX))
    app.mount(
        settings.AVATARS_URL_PATH,
        StaticFiles(directory=str(file_manager.avatars_dir)),
        name="avatars",
    )

    @app.get("/", include_in_schema=False)
    async def root() -> dict:
        """Root endpoint with API information."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "health_check": "/health",
            "api_base": settings.API_PREFIX,
        }

    @app.get("/favicon.ico", include_in_schema=False)
    async def favicon():
        return Response(status_code=204)

    logger.info(f"{settings.APP_NAME} configured for {settings.ENVIRONMENT}")
    return app


def __getattr__(name: str):
    # `uvicorn contactbook.main:app` builds the app on first access, once secrets are in the environment
    if name == "app":
        application = create_application()
        globals()["app"] = application
        return application
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def main():
    """
    Run the application with uvicorn.

    Used by the ``contactbook`` console script and ``python -m contactbook.main``.
    """
    settings = get_settings()
    uvicorn.run(
        "contactbook.main:create_application",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.RELOAD and settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
