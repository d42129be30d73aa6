"""
Security utilities for password hashing and signed, time-limited tokens.
Provides the primitives the authentication flow is built on.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from ..config.settings import Settings

logger = logging.getLogger(__name__)


class TokenType(str, Enum):
    """Token classes issued by the service, each with its own secret."""
    SESSION = "session"
    VERIFICATION = "verification"


class PasswordHasher:
    """
    One-way salted password hashing with bcrypt.

    The generated hash embeds salt and cost, so verification needs nothing
    but the stored string.
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        """
        Hash password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            str: Hashed password
        """
        hashed = self._context.hash(password)
        logger.debug("Password hashed successfully")
        return hashed

    def verify(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Verify password against hash.

        Never raises: a missing or malformed stored hash fails closed.

        Args:
            plain_password: Plain text password
            hashed_password: Stored hashed password

        Returns:
            bool: True if password matches
        """
        if not hashed_password:
            return False
        try:
            return self._context.verify(plain_password, hashed_password)
        except (ValueError, TypeError) as e:
            logger.warning(f"Password verification rejected malformed hash: {e}")
            return False


class TokenService:
    """
    Issues and validates signed JWTs.

    Validation never raises to the caller; a bad signature, a malformed
    token or an expired one all yield ``None``.
    """

    def __init__(self, algorithm: str = "HS256"):
        self.algorithm = algorithm

    def issue(self, claims: Dict[str, Any], secret: str, ttl: timedelta) -> str:
        """
        Create a token carrying ``claims`` that expires after ``ttl``.

        Args:
            claims: Token payload data
            secret: Signing secret
            ttl: Lifetime of the token

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        to_encode = dict(claims)
        to_encode.update({
            "iat": now,
            "exp": now + ttl,
            "jti": uuid.uuid4().hex,
        })
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def validate(self, token: Optional[str], secret: str) -> Optional[Dict[str, Any]]:
        """
        Verify and decode a token.

        Args:
            token: JWT token to verify
            secret: Secret the token must have been signed with

        Returns:
            dict: Decoded claims, or None when the token is invalid or expired
        """
        if not token:
            return None
        try:
            return jwt.decode(token, secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Token validation failed: {e}")
            return None


class SecurityManager:
    """
    Centralized security manager for the authentication flow.
    Binds the hasher and token service to the configured secrets and lifetimes.
    """

    def __init__(self, settings: Settings):
        self.hasher = PasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        self.tokens = TokenService(algorithm=settings.JWT_ALGORITHM)
        self._secrets = {
            TokenType.SESSION: settings.AUTH_SECRET,
            TokenType.VERIFICATION: settings.VERIFICATION_SECRET,
        }
        self._lifetimes = {
            TokenType.SESSION: timedelta(hours=settings.SESSION_TOKEN_EXPIRE_HOURS),
            TokenType.VERIFICATION: timedelta(hours=settings.VERIFICATION_TOKEN_EXPIRE_HOURS),
        }

    def get_password_hash(self, password: str) -> str:
        return self.hasher.hash(password)

    def verify_password(self, plain_password: str, hashed_password: Optional[str]) -> bool:
        return self.hasher.verify(plain_password, hashed_password)

    def create_token(
        self,
        user_id: str,
        token_type: TokenType,
        expires_delta: Optional[timedelta] = None,
    ) -> str:
        """Issue a session or verification token for ``user_id``."""
        ttl = expires_delta if expires_delta is not None else self._lifetimes[token_type]
        token = self.tokens.issue({"id": user_id}, self._secrets[token_type], ttl)
        logger.debug(f"{token_type.value} token created for user: {user_id}")
        return token

    def decode_token(self, token: Optional[str], token_type: TokenType) -> Optional[Dict[str, Any]]:
        """Validate a token of the given class; ``None`` when invalid."""
        payload = self.tokens.validate(token, self._secrets[token_type])
        if payload is None or not payload.get("id"):
            return None
        return payload
