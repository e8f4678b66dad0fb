"""
Issue repository with the project-scoped lookups the issue service needs.
"""

from core.models import Issue, State

from .base import BaseRepository

# Filterable text columns, keyed by the names the issue service uses
CONTAINS_COLUMNS = {
    "title": Issue.title,
    "reporter": Issue.reporter_id,
    "assignee": Issue.assignee_id,
}


class IssueRepository(BaseRepository[Issue]):
    """
    Repository for Issue operations.

    All list queries are scoped to one project and ordered by id, which is
    insertion order.
    """

    model = Issue

    def find_by_project(self, project_id: int) -> list[Issue]:
        """All issues of a project."""
        return (
            self.session.query(Issue)
            .filter(Issue.project_id == project_id)
            .order_by(Issue.id)
            .all()
        )

    def find_by_project_and_field_containing(
        self, project_id: int, field: str, value: str
    ) -> list[Issue]:
        """
        Issues whose ``field`` contains ``value``, ignoring case.

        Args:
            project_id: Project scope
            field: One of ``title``, ``reporter`` or ``assignee``
            value: Substring to look for; ``%`` and ``_`` match literally

        Raises:
            ValueError: If ``field`` is not filterable
        """
        column = CONTAINS_COLUMNS.get(field)
        if column is None:
            raise ValueError(f"Unknown filter field: {field}")

        return (
            self.session.query(Issue)
            .filter(
                Issue.project_id == project_id,
                column.icontains(value, autoescape=True),
            )
            .order_by(Issue.id)
            .all()
        )

    def find_by_project_and_state(self, project_id: int, state: State) -> list[Issue]:
        """Issues of a project in exactly ``state``."""
        return (
            self.session.query(Issue)
            .filter(Issue.project_id == project_id, Issue.state == state)
            .order_by(Issue.id)
            .all()
        )
