"""
Persistence adapters.

Services depend on the BugStore interface; the SQL and JSON-file adapters
are interchangeable implementations picked from configuration.
"""

from .base import BugStore
from .json_storage import JSONBugRepository
from .sql_repository import SQLBugRepository

__all__ = ["BugStore", "JSONBugRepository", "SQLBugRepository"]
