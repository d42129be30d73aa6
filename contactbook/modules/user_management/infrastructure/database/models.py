# 📄 File: contactbook/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how user accounts are stored in the database: email, password fingerprint,
# plan, login session and email verification state.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model implementing the users table, mapping the User domain model
# to a relational row with uniqueness and enum constraints.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - contactbook.shared.infrastructure.database.connection (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py (CRUD operations)
# - contacts module models (owner foreign key)
# - Alembic migrations (schema generation)

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, String, Text, func

from contactbook.shared.infrastructure.database.connection import Base


class UserModel(Base):
    """
    SQLAlchemy model for user authentication and account management.
    """
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            "subscription IN ('starter', 'pro', 'business')",
            name="ck_users_subscription",
        ),
    )

    user_id = Column(
        String(36),
        primary_key=True,
        nullable=False,
        comment="Unique identifier for each user"
    )
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="User's email address"
    )
    password_hash = Column(
        String(255),
        nullable=False,
        comment="Hashed password using bcrypt"
    )
    subscription = Column(
        String(20),
        nullable=False,
        default="starter",
        comment="Subscription tier (starter/pro/business)"
    )
    session_token = Column(
        Text,
        nullable=True,
        comment="Currently valid session token, null when logged out"
    )
    verified = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Email verification status"
    )
    verification_token = Column(
        Text,
        nullable=True,
        index=True,
        comment="Pending email verification token"
    )
    avatar_url = Column(
        String(500),
        nullable=False,
        default="",
        comment="Public path or URL of the avatar image"
    )

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Account creation date"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Last modification date"
    )

    def __repr__(self) -> str:
        return f"<UserModel(user_id={self.user_id}, email={self.email})>"
