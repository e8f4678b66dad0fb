"""
FastAPI dependency injection module.

Provides centralized dependencies for:
- Repositories
- Services
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from core.repositories import (
    MemberProjectRepository,
    MemberRepository,
    ProjectRepository,
)
from core.services import IssueService, SqlIssueStore

from ..config import get_settings
from ..database import get_db

# =============================================================================
# Repository Dependencies
# =============================================================================


def get_member_repository(db: Session = Depends(get_db)) -> MemberRepository:
    """Get MemberRepository instance."""
    return MemberRepository(db)


def get_member_project_repository(db: Session = Depends(get_db)) -> MemberProjectRepository:
    """Get MemberProjectRepository instance."""
    return MemberProjectRepository(db)


def get_project_repository(db: Session = Depends(get_db)) -> ProjectRepository:
    """Get ProjectRepository instance."""
    return ProjectRepository(db)


# =============================================================================
# Service Dependencies
# =============================================================================


def get_issue_service(db: Session = Depends(get_db)) -> IssueService:
    """Get IssueService bound to the request's session."""
    return IssueService(SqlIssueStore(db), recommend_limit=get_settings().recommend_limit)


__all__ = [
    # Repository dependencies
    "get_member_repository",
    "get_member_project_repository",
    "get_project_repository",
    # Service dependencies
    "get_issue_service",
]
