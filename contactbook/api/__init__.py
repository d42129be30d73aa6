# 📄 File: contactbook/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# This file marks the api folder as a Python package holding the web layer of the contact book.
# 🧪 Purpose (Technical Summary):
# Package initialization for the API layer: versioned routers and HTTP middleware.
# 🔗 Dependencies:
# None (package initialization)
# 🔄 Connected Modules / Calls From:
# contactbook.main

"""
Contact Book API Package

Structure:
    api/
    ├── middleware/
    │   ├── error_handling.py   # last-resort 500 responses
    │   └── logging.py          # request logging and X-Request-ID
    └── v1/
        ├── router.py
        └── health.py
"""

__version__ = "1.0.0"
CURRENT_VERSION = "v1"

__all__ = [
    "CURRENT_VERSION",
]
