"""
Async SQLAlchemy engine and session management.
"""

from .connection import Base, DatabaseConnectionManager
from .session import DatabaseSessionManager, get_db_session

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "DatabaseSessionManager",
    "get_db_session",
]
