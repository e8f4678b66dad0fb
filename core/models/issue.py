"""
Issue SQLAlchemy model with its lifecycle enums.
"""

import enum
from datetime import datetime
from typing import TYPE_CHECKING, Dict, Optional

from sqlalchemy import DateTime, Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from .member import Member
    from .project import Project


class State(str, enum.Enum):
    """Issue lifecycle stage."""

    NEW = "NEW"
    ASSIGNED = "ASSIGNED"
    FIXED = "FIXED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"
    REOPEN = "REOPEN"


class Priority(str, enum.Enum):
    """Issue severity, least to most severe."""

    TRIVIAL = "TRIVIAL"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"

    def to_value(self) -> int:
        """Workload weight used when scoring assignees."""
        return PRIORITY_WEIGHTS[self]


PRIORITY_WEIGHTS = {
    Priority.TRIVIAL: 0,
    Priority.MINOR: 1,
    Priority.MAJOR: 2,
    Priority.CRITICAL: 4,
    Priority.BLOCKER: 8,
}


class Issue(Base):
    """
    An issue reported against a project.

    The reporter is fixed at creation. Assignee and fixer stay ``None`` until
    set; the recommendation engine relies on ``fixer_id is None`` to find open
    work.
    """
    __tablename__ = "issues"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id"), index=True)
    reporter_id: Mapped[str] = mapped_column(ForeignKey("members.id"), index=True)
    assignee_id: Mapped[Optional[str]] = mapped_column(ForeignKey("members.id"), index=True)
    fixer_id: Mapped[Optional[str]] = mapped_column(ForeignKey("members.id"))
    title: Mapped[str] = mapped_column(String(512))
    description: Mapped[Optional[str]] = mapped_column(Text)
    priority: Mapped[Priority] = mapped_column(
        SQLEnum(Priority, name="issue_priority"), default=Priority.MAJOR
    )
    state: Mapped[State] = mapped_column(SQLEnum(State, name="issue_state"), default=State.NEW)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.now)
    modified_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.now, onupdate=datetime.now
    )

    # Relationships
    project: Mapped["Project"] = relationship("Project", back_populates="issues")
    reporter: Mapped["Member"] = relationship("Member", foreign_keys=[reporter_id])
    assignee: Mapped[Optional["Member"]] = relationship("Member", foreign_keys=[assignee_id])
    fixer: Mapped[Optional["Member"]] = relationship("Member", foreign_keys=[fixer_id])

    def to_dict(self) -> Dict:
        """
        Convert the issue record into a serializable dictionary.

        Returns:
            Dictionary compatible with API responses.
        """
        return {
            "id": self.id,
            "project_id": self.project_id,
            "title": self.title,
            "description": self.description,
            "reporter_id": self.reporter_id,
            "assignee_id": self.assignee_id,
            "fixer_id": self.fixer_id,
            "priority": self.priority.value if self.priority else None,
            "state": self.state.value if self.state else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "modified_at": self.modified_at.isoformat() if self.modified_at else None,
        }
