# 📄 File: contactbook/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the checks every request passes through on its way in and out.
# 🧪 Purpose (Technical Summary):
# HTTP middleware package: error handling and request logging.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware
# 🔄 Connected Modules / Calls From:
# contactbook.main (middleware registration)

from .error_handling import ErrorHandlingMiddleware
from .logging import RequestLoggingMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
]
