# 📄 File: contactbook/modules/contacts/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# How contacts are actually kept in the database.
# 🧪 Purpose (Technical Summary):
# Contacts infrastructure layer: SQLAlchemy model and repository implementation.
# 🔗 Dependencies:
# contactbook.modules.contacts.domain, contactbook.shared.infrastructure.database
# 🔄 Connected Modules / Calls From:
# contacts presentation dependencies, database table creation, Alembic
