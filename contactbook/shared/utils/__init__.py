# 📄 File: contactbook/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# This file sets up a collection of helpful tools that other parts of the service
# use for common tasks like logging, checking input and formatting error messages.

# 🧪 Purpose (Technical Summary):
# Utilities package: structured logging, validators, formatters and helpers.

# 🔗 Dependencies:
# - logging: Structured logging utilities
# - validators: Email and upload validation
# - formatters: Validation error formatting
# - helpers: Time and Gravatar helpers

# 🔄 Connected Modules / Calls From:
# Used by: All application modules

__all__ = [
    "formatters",
    "helpers",
    "logging",
    "validators",
]
