"""
SQLAlchemy models for the issue tracker.

Single source of truth for all database models.

Usage:
    from core.models import Issue, Member, Project, Role, State
"""

from core.db import Base

from .issue import PRIORITY_WEIGHTS, Issue, Priority, State
from .member import Member, MemberProject, Role
from .project import Project

__all__ = [
    # Base
    "Base",
    # Members
    "Member",
    "MemberProject",
    "Role",
    # Projects
    "Project",
    # Issues
    "Issue",
    "Priority",
    "PRIORITY_WEIGHTS",
    "State",
]
