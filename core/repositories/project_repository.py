"""Project repository with membership management."""

from collections.abc import Iterable

from core.logging import get_logger
from core.models import MemberProject, Project, Role

from .base import BaseRepository

logger = get_logger("repository.project")


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    model = Project

    def list_for_member(self, member_id: str) -> list[Project]:
        """Projects the member belongs to, oldest first."""
        return (
            self.session.query(Project)
            .join(MemberProject, MemberProject.project_id == Project.id)
            .filter(MemberProject.member_id == member_id)
            .order_by(Project.id)
            .all()
        )

    def create_with_members(self, title: str, members: Iterable[tuple[str, Role]]) -> Project:
        """
        Create a project and its memberships in one flush.

        A member listed twice keeps the last role given.
        """
        project = Project(title=title)
        self.session.add(project)
        self.session.flush()
        self._add_members(project, members)
        logger.info("project_created", project_id=project.id, title=title)
        return project

    def replace_members(self, project: Project, members: Iterable[tuple[str, Role]]) -> None:
        """Drop every membership of the project and add ``members`` instead."""
        (
            self.session.query(MemberProject)
            .filter(MemberProject.project_id == project.id)
            .delete(synchronize_session="fetch")
        )
        self.session.flush()
        self.session.expire(project, ["memberships"])
        self._add_members(project, members)
        logger.info("project_members_replaced", project_id=project.id)

    def _add_members(self, project: Project, members: Iterable[tuple[str, Role]]) -> None:
        roles = dict(members)
        for member_id, role in roles.items():
            self.session.add(MemberProject(member_id=member_id, project_id=project.id, role=role))
        self.session.flush()
