# 📄 File: contactbook/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the contact book - their email, password fingerprint, plan,
# whether they proved they own their email, and which login session is currently valid.
# 🧪 Purpose (Technical Summary):
# Domain model for the User entity with the business rules of the session and verification
# lifecycles (session set/cleared, verification pending -> verified exactly once).
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid, enum
# 🔄 Connected Modules / Calls From:
# auth_service.py, avatar_service.py, user_repository.py, presentation dependencies

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class SubscriptionTier(str, Enum):
    """Subscription tier enumeration"""
    STARTER = "starter"
    PRO = "pro"
    BUSINESS = "business"


class User(BaseModel):
    """
    User domain model representing an account holder of the contact book.

    Fields:
    - user_id: opaque identifier assigned at creation, immutable
    - email: unique address, stored as given (case-sensitive lookups)
    - password_hash: bcrypt hash, never exposed in responses
    - subscription: starter, pro or business
    - session_token: set while a session is live, cleared on logout
    - verified: monotonic, flips to True once via verification
    - verification_token: present only while verification is pending
    - avatar_url: path or URL of the current avatar image
    """

    model_config = ConfigDict(validate_assignment=True)

    user_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    email: str
    password_hash: str
    subscription: SubscriptionTier = SubscriptionTier.STARTER
    session_token: Optional[str] = None
    verified: bool = False
    verification_token: Optional[str] = None
    avatar_url: str = ""

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Fields changed through the business methods since load or last save
    _changed: FrozenSet[str] = PrivateAttr(default_factory=frozenset)

    # Business Logic Methods

    def start_session(self, token: str) -> None:
        """Record a freshly issued session token; any earlier session stops working."""
        self.session_token = token
        self._touch("session_token")

    def end_session(self) -> None:
        self.session_token = None
        self._touch("session_token")

    def has_active_session(self, token: Optional[str] = None) -> bool:
        """
        Check whether a session is live, optionally for a specific token.

        Args:
            token: Token presented by the client

        Returns:
            True if a session exists and, when given, ``token`` is that session
        """
        if self.session_token is None:
            return False
        if token is None:
            return True
        return self.session_token == token

    def rotate_verification_token(self, token: str) -> None:
        """Replace the pending verification token (resend)."""
        if self.verified:
            raise ValueError("User is already verified")
        self.verification_token = token
        self._touch("verification_token")

    def mark_verified(self) -> None:
        """Complete verification; the token is consumed and cannot be reused."""
        self.verified = True
        self.verification_token = None
        self._touch("verified", "verification_token")

    def change_subscription(self, tier: SubscriptionTier) -> None:
        self.subscription = tier
        self._touch("subscription")

    def change_avatar(self, avatar_url: str) -> None:
        self.avatar_url = avatar_url
        self._touch("avatar_url")

    def pending_changes(self) -> Dict[str, Any]:
        """
        Values of the fields changed since the user was loaded.

        Repositories persist only these fields; columns the user did not change
        keep whatever another request last wrote.
        """
        if not self._changed:
            return {}
        return {name: getattr(self, name) for name in sorted(self._changed | {"updated_at"})}

    def clear_changes(self) -> None:
        self._changed = frozenset()

    def _touch(self, *fields: str) -> None:
        self._changed = self._changed | frozenset(fields)
        self.updated_at = datetime.now(timezone.utc)

    def to_public_dict(self) -> Dict[str, Any]:
        """Profile fields safe to return to the account holder."""
        return {
            "email": self.email,
            "subscription": self.subscription.value,
            "avatarUrl": self.avatar_url,
        }

    def __str__(self) -> str:
        return f"User({self.user_id}, {self.email})"
