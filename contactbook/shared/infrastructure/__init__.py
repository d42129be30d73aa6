"""
Infrastructure layer package for the Contact Book service.
Provides database connections, avatar file storage and the email client.
"""

__all__ = [
    "database",
    "external_apis",
    "storage",
]
