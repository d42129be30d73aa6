# 📄 File: contactbook/modules/contacts/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing side of the address book.
# 🧪 Purpose (Technical Summary):
# Contacts presentation layer: FastAPI router, schemas and dependency factories.
# 🔗 Dependencies:
# FastAPI, contacts domain services
# 🔄 Connected Modules / Calls From:
# contactbook.main (router registration)
