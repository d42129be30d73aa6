# 📄 File: contactbook/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the contact book web API.
# 🧪 Purpose (Technical Summary):
# API v1 package: router aggregation and health endpoints.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# contactbook.main

"""
API v1

    v1/
    ├── router.py   # Aggregates module routers under API_PREFIX
    └── health.py   # /health, /health/live
"""

__version__ = "1.0.0"
__api_version__ = "v1"
