"""
Member and project-membership SQLAlchemy models.
"""

import enum
from typing import TYPE_CHECKING, List

from sqlalchemy import Enum as SQLEnum
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from .project import Project


class Role(str, enum.Enum):
    """Role a member holds on a project."""

    PL = "PL"
    DEV = "DEV"
    TESTER = "TESTER"


class Member(Base):
    """
    A registered member.

    Attributes:
        id: Login id chosen at sign-up (primary key)
        name: Display name
        mail: Contact address
        password: bcrypt hash of the member's password
    """

    __tablename__ = "members"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255))
    mail: Mapped[str] = mapped_column(String(255))
    password: Mapped[str] = mapped_column(String(255))

    memberships: Mapped[List["MemberProject"]] = relationship(
        "MemberProject", back_populates="member", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Member {self.id}>"


class MemberProject(Base):
    """One member's role on one project."""

    __tablename__ = "member_projects"
    __table_args__ = (
        UniqueConstraint("member_id", "project_id", name="uq_member_projects_member_project"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    member_id: Mapped[str] = mapped_column(ForeignKey("members.id"), index=True)
    project_id: Mapped[int] = mapped_column(ForeignKey("projects.id"), index=True)
    role: Mapped[Role] = mapped_column(SQLEnum(Role, name="member_role"))

    member: Mapped["Member"] = relationship("Member", back_populates="memberships")
    project: Mapped["Project"] = relationship("Project", back_populates="memberships")
