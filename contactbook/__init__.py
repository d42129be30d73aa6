# 📄 File: contactbook/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# The main entry point that tells Python this 'contactbook' folder contains the contact book
# service code and sets up the basic version and package information.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version info and package metadata for the
# Contact Book FastAPI application.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - pyproject.toml (package discovery)

"""
Contact Book API - multi-tenant contact management backend

User registration with email verification, JWT session tokens, avatar
uploads and per-user contacts CRUD.
"""

__version__ = "1.0.0"
__title__ = "Contact Book API"
__description__ = "Contact management REST backend with verified accounts and avatars"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
    "__license__",
]
