"""
Core utilities package for the Contact Book service.
Provides security, the error taxonomy and rate limiting.
"""

from .exceptions import (
    ContactBookException,
    ErrorKind,
    AuthenticationError,
    ValidationError,
    NotFoundError,
    ConflictError,
    RateLimitError,
    ExternalServiceError,
    DatabaseError,
    status_code_for,
)

from .security import (
    PasswordHasher,
    TokenService,
    TokenType,
    SecurityManager,
)

from .rate_limiter import (
    RateLimiter,
    configure_rate_limiter,
    enforce_auth_rate_limit,
)

__all__ = [
    # Exceptions
    "ContactBookException",
    "ErrorKind",
    "AuthenticationError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "ExternalServiceError",
    "DatabaseError",
    "status_code_for",

    # Security
    "PasswordHasher",
    "TokenService",
    "TokenType",
    "SecurityManager",

    # Rate limiting
    "RateLimiter",
    "configure_rate_limiter",
    "enforce_auth_rate_limit",
]
