# 📄 File: contactbook/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# This file keeps a diary of every request made to the contact book, recording what was asked
# for, how it ended and how long it took, without ever writing down passwords or login passes.
# 🧪 Purpose (Technical Summary):
# Request logging middleware: request-id correlation (X-Request-ID in and out), structured
# start/finish records with timing, and redaction of credentials in paths and headers.
# 🔗 Dependencies:
# FastAPI, starlette, contactbook.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# contactbook.main (middleware registration)

import logging
import re
import time
import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from contactbook.shared.utils.logging import clear_request_context, set_request_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Verification links carry a token in the path
_VERIFY_PATH = re.compile(r"(/verify/)[^/]+")


def redact_path(path: str) -> str:
    return _VERIFY_PATH.sub(r"\1[REDACTED]", path)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Request logging middleware.

    Never logs the Authorization header, request bodies or verification tokens.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 2.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = self._get_or_create_request_id(request)
        set_request_context(request_id)
        path = redact_path(request.url.path)
        start_time = time.perf_counter()

        logger.debug(
            f"Request started: {request.method} {path}",
            extra={"method": request.method, "path": path, "client_ip": self._client_ip(request)},
        )

        try:
            response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.error(
                f"Request failed: {request.method} {path} after {duration:.3f}s",
                extra={"method": request.method, "path": path, "duration": round(duration, 4)},
            )
            clear_request_context()
            raise

        duration = time.perf_counter() - start_time
        level = logging.WARNING if duration > self.slow_request_threshold else logging.INFO
        logger.log(
            level,
            f"{request.method} {path} -> {response.status_code} ({duration:.3f}s)",
            extra={
                "method": request.method,
                "path": path,
                "status_code": response.status_code,
                "duration": round(duration, 4),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        clear_request_context()
        return response

    def _get_or_create_request_id(self, request: Request) -> str:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id
        return request_id

    @staticmethod
    def _client_ip(request: Request) -> str:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
