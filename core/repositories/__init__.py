"""
Repository pattern implementations for data access.

Usage:
    from core.repositories import IssueRepository
    from core.db import db

    with db.session() as session:
        repo = IssueRepository(session)
        issues = repo.find_by_project(project_id)
"""

from .base import BaseRepository
from .issue_repository import IssueRepository
from .member_repository import MemberProjectRepository, MemberRepository
from .project_repository import ProjectRepository

__all__ = [
    "BaseRepository",
    "IssueRepository",
    "MemberRepository",
    "MemberProjectRepository",
    "ProjectRepository",
]
