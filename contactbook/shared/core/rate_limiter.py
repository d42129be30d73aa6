"""
Rate limiting for the authentication endpoints.
Per-client-address fixed window limits via the limits library with in-memory storage.
Each application owns its limiter, configured from its settings.
"""

import logging

from fastapi import Request
from limits import RateLimitItem, parse
from limits.storage import MemoryStorage
from limits.strategies import FixedWindowRateLimiter

from ..config.settings import Settings
from .exceptions import RateLimitError

logger = logging.getLogger(__name__)


class RateLimiter:
    """
    Request budgets keyed by endpoint and client address.

    Signup and login share the configured limit but count separately.
    """

    def __init__(self, auth_limit: str, enabled: bool = True):
        self.enabled = enabled
        self.auth_limit: RateLimitItem = parse(auth_limit)
        self._strategy = FixedWindowRateLimiter(MemoryStorage())

    def is_allowed(self, scope: str, identifier: str) -> bool:
        """
        Consume one request from the budget of ``identifier`` on ``scope``.

        Returns:
            bool: False once the budget of the current window is used up
        """
        if not self.enabled:
            return True
        return self._strategy.hit(self.auth_limit, scope, identifier)


def configure_rate_limiter(settings: Settings) -> RateLimiter:
    """
    Build the limiter of one application.

    Args:
        settings: Application settings

    Returns:
        RateLimiter: Limiter to be stored on ``app.state.limiter``
    """
    limiter = RateLimiter(settings.AUTH_RATE_LIMIT, enabled=settings.RATE_LIMIT_ENABLED)
    logger.info(
        f"Rate limiting {'enabled' if limiter.enabled else 'disabled'} "
        f"(auth limit {settings.AUTH_RATE_LIMIT})"
    )
    return limiter


def client_address(request: Request) -> str:
    return request.client.host if request.client else "127.0.0.1"


async def enforce_auth_rate_limit(request: Request) -> None:
    """
    Dependency applying the signup/login limit of the serving application.

    Raises:
        RateLimitError: If the client used up its budget for this endpoint
    """
    limiter: RateLimiter = request.app.state.limiter
    client = client_address(request)
    if not limiter.is_allowed(request.url.path, client):
        logger.warning(f"Rate limit exceeded for {client} on {request.url.path}")
        raise RateLimitError(f"Rate limit exceeded: {limiter.auth_limit}")
