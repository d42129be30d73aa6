# 📄 File: contactbook/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Contains the settings that tell the contact book how to connect to its database and
# email provider and how to behave.
#
# 🧪 Purpose (Technical Summary):
# Configuration package exposing the pydantic-settings Settings class and its cached factory.

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
