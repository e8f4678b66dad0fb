"""
Database session access for the API layer.

Re-exports from the unified core.db module so routers and dependencies have a
single import point that tests can override:

    app.dependency_overrides[get_db] = override_get_db

Database initialization happens explicitly in the app startup hook, not at
import time.
"""

from core.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
