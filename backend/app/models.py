"""
SQLAlchemy ORM models for the API layer.

Re-exports all models from the unified core.models package.
"""

from core.models import (
    Base,
    Issue,
    Member,
    MemberProject,
    Priority,
    Project,
    Role,
    State,
)

__all__ = [
    "Base",
    "Member",
    "MemberProject",
    "Role",
    "Project",
    "Issue",
    "Priority",
    "State",
]
