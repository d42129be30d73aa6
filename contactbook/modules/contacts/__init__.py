# 📄 File: contactbook/modules/contacts/__init__.py
# 🧭 Purpose (Layman Explanation):
# The address book part of the service: each user keeps their own private list of contacts.
# 🧪 Purpose (Technical Summary):
# Contacts module package: owner-scoped contact CRUD with domain, infrastructure and
# presentation layers.
# 🔗 Dependencies:
# contactbook.shared, contactbook.modules.user_management (session authentication)
# 🔄 Connected Modules / Calls From:
# contactbook.main (router registration)

"""
Contacts Module

Layers:
- domain: Contact model, ContactRepository interface, ContactService
- infrastructure: ContactModel table and SQLAlchemy repository
- presentation: /contacts endpoints and schemas
"""
