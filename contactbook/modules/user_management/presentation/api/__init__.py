# 📄 File: contactbook/modules/user_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the account endpoints.
# 🧪 Purpose (Technical Summary):
# API package for user management: versioned routers and request/response schemas.
# 🔗 Dependencies:
# FastAPI routers, Pydantic schemas
# 🔄 Connected Modules / Calls From:
# contactbook.api.v1.router
