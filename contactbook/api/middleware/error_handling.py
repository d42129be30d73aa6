# 📄 File: contactbook/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# This file catches any error nobody else handled and turns it into a plain "something went
# wrong on our side" answer, so one bad request can never bring the service down.
# 🧪 Purpose (Technical Summary):
# Last-resort error handling middleware: converts escaped exceptions into the common
# {"message", "code"} error body, logging unexpected ones with their traceback.
# 🔗 Dependencies:
# FastAPI, starlette, contactbook.shared.core.exceptions, logging
# 🔄 Connected Modules / Calls From:
# contactbook.main (middleware registration)

import logging
from typing import Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from contactbook.shared.core.exceptions import ContactBookException, ErrorKind, status_code_for

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """
    Global error handling middleware.

    Classified errors normally become responses in the exception handlers
    registered on the app; this middleware only sees what escaped them.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        if isinstance(exc, ContactBookException):
            logger.warning(
                f"{exc.kind.value} error on {request.method} {request.url.path}: {exc.message}"
            )
            return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

        logger.error(
            f"Unhandled {type(exc).__name__} on {request.method} {request.url.path}",
            exc_info=exc,
            extra={"request_id": self._request_id(request)},
        )
        return JSONResponse(
            status_code=status_code_for(ErrorKind.INTERNAL),
            content={"message": INTERNAL_ERROR_MESSAGE, "code": ErrorKind.INTERNAL.value},
        )

    @staticmethod
    def _request_id(request: Request) -> Optional[str]:
        return getattr(request.state, "request_id", None)
