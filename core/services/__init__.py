"""
Core services with the issue tracker's business logic.

Services work against narrow storage contracts so they can run on a
SQLAlchemy session in production and on an in-memory store in tests.
"""

from core.services.issue_service import (
    InvalidFilterError,
    IssueService,
    IssueStatistic,
)
from core.services.store import IssueStore, SqlIssueStore

__all__ = [
    "InvalidFilterError",
    "IssueService",
    "IssueStatistic",
    "IssueStore",
    "SqlIssueStore",
]
