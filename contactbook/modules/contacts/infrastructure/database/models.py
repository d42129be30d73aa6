# 📄 File: contactbook/modules/contacts/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how contacts are stored in the database and ties each one to its owner.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM model implementing the contacts table with an owner foreign key to users.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - contactbook.shared.infrastructure.database.connection (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - contact_repository_impl.py (CRUD operations)
# - Alembic migrations (schema generation)

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, func

from contactbook.shared.infrastructure.database.connection import Base


class ContactModel(Base):
    """
    SQLAlchemy model for owner-scoped contacts.
    """
    __tablename__ = "contacts"
    __table_args__ = (
        Index("ix_contacts_owner_favorite", "owner_id", "favorite"),
    )

    contact_id = Column(
        String(36),
        primary_key=True,
        nullable=False,
        comment="Unique identifier for each contact"
    )
    owner_id = Column(
        String(36),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User that owns the contact"
    )
    name = Column(String(255), nullable=False, comment="Contact name")
    email = Column(String(255), nullable=True, comment="Contact email")
    phone = Column(String(50), nullable=True, comment="Contact phone number")
    favorite = Column(Boolean, nullable=False, default=False, comment="Favorite flag")
    avatar_url = Column(String(500), nullable=True, comment="Contact picture")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Creation date"
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        comment="Last modification date"
    )

    def __repr__(self) -> str:
        return f"<ContactModel(contact_id={self.contact_id}, owner_id={self.owner_id})>"
