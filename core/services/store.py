"""
Storage boundary of the issue service.

The issue service only talks to an ``IssueStore``: a narrow set of lookups,
a save and a delete. ``SqlIssueStore`` implements it over the repositories;
tests substitute an in-memory store with the same shape.
"""

from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.models import Issue, Member, MemberProject, Project, Role, State
from core.repositories import (
    IssueRepository,
    MemberProjectRepository,
    MemberRepository,
    ProjectRepository,
)


class IssueStore(Protocol):
    """Contract for the data the issue service reads and writes."""

    def get_member(self, member_id: str) -> Member | None: ...

    def get_project(self, project_id: int) -> Project | None: ...

    def get_issue(self, issue_id: int) -> Issue | None: ...

    def issues_by_project(self, project_id: int) -> list[Issue]: ...

    def issues_by_project_and_field(
        self, project_id: int, field: str, value: str
    ) -> list[Issue]: ...

    def issues_by_project_and_state(self, project_id: int, state: State) -> list[Issue]: ...

    def membership(self, member_id: str, project_id: int) -> MemberProject | None: ...

    def memberships_by_role(self, project_id: int, role: Role) -> list[MemberProject]: ...

    def save_issue(self, issue: Issue) -> Issue: ...

    def delete_issue(self, issue: Issue) -> None: ...


class SqlIssueStore:
    """``IssueStore`` backed by a SQLAlchemy session."""

    def __init__(self, session: Session):
        self.session = session
        self.members = MemberRepository(session)
        self.projects = ProjectRepository(session)
        self.memberships = MemberProjectRepository(session)
        self.issues = IssueRepository(session)

    def get_member(self, member_id: str) -> Member | None:
        return self.members.get_by_id(member_id)

    def get_project(self, project_id: int) -> Project | None:
        return self.projects.get_by_id(project_id)

    def get_issue(self, issue_id: int) -> Issue | None:
        return self.issues.get_by_id(issue_id)

    def issues_by_project(self, project_id: int) -> list[Issue]:
        return self.issues.find_by_project(project_id)

    def issues_by_project_and_field(
        self, project_id: int, field: str, value: str
    ) -> list[Issue]:
        return self.issues.find_by_project_and_field_containing(project_id, field, value)

    def issues_by_project_and_state(self, project_id: int, state: State) -> list[Issue]:
        return self.issues.find_by_project_and_state(project_id, state)

    def membership(self, member_id: str, project_id: int) -> MemberProject | None:
        return self.memberships.find_by_member_and_project(member_id, project_id)

    def memberships_by_role(self, project_id: int, role: Role) -> list[MemberProject]:
        return self.memberships.find_by_project_and_role(project_id, role)

    def save_issue(self, issue: Issue) -> Issue:
        try:
            return self.issues.save(issue)
        except SQLAlchemyError:
            # Leave nothing half-written behind for the request's commit
            self.session.rollback()
            raise

    def delete_issue(self, issue: Issue) -> None:
        self.issues.remove(issue)


__all__ = ["IssueStore", "SqlIssueStore"]
