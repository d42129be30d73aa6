# 📄 File: contactbook/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes the account system: signing up, confirming an email, logging in and out,
# choosing a plan and setting a profile picture.
# 🧪 Purpose (Technical Summary):
# Package initialization for the user management module (credential store, session and
# verification workflows, avatar pipeline) following the domain/infrastructure/presentation layering.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, contactbook.shared.core, pydantic, passlib, python-jose
# 🔄 Connected Modules / Calls From:
# contactbook.main, contacts module (session authentication)

"""
User Management Module

- Registration with email verification (one-shot, time limited links)
- Login issuing a session token that is stored for revocation-by-mismatch
- Logout, current profile, subscription tiers (starter/pro/business)
- Avatar upload: validate, stage, resize, relocate, clean up

Architecture:
- Domain: User entity, repository interface, AuthService, AvatarService
- Infrastructure: UserModel table, SQLAlchemy repository, verification mailer
- Presentation: /users endpoints, schemas, session authenticator
"""

from typing import Dict

__version__ = "1.0.0"
__module_name__ = "user_management"
__description__ = "User accounts, sessions and avatars"


def get_module_info() -> Dict[str, str]:
    return {
        "name": __module_name__,
        "version": __version__,
        "description": __description__,
    }


__all__ = [
    "__version__",
    "__module_name__",
    "__description__",
    "get_module_info",
]
