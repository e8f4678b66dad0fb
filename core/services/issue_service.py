"""
Issue lifecycle service.

Enforces the issue state machine, who may move an issue between states,
assignment rules, and per-project statistics. Failures come back as
``False`` / ``None``; only a malformed list filter raises.

    NEW --assign--> ASSIGNED --dev fixes--> FIXED --reporter resolves--> RESOLVED
    REOPEN --dev fixes--> FIXED
    A project lead may move an issue to any state, including CLOSED and REOPEN.

Usage:
    from core.services import IssueService, SqlIssueStore

    with db.session() as session:
        service = IssueService(SqlIssueStore(session))
        service.assign_issue(project_id, issue_id, "dev1", Priority.CRITICAL)
"""

from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import date

from core.logging import get_logger
from core.models import Issue, Priority, Role, State

from .recommendation import rank_candidates, score_workloads
from .store import IssueStore

logger = get_logger("service.issue")

TEXT_FILTERS = ("title", "reporter", "assignee")


class InvalidFilterError(ValueError):
    """Raised when a list filter names an unknown field or an unknown state."""


@dataclass(frozen=True)
class IssueStatistic:
    """Issue counts for one project, taken at a single moment."""

    day: int
    month: int
    total: int
    closed: int

    def to_dict(self) -> dict:
        return asdict(self)


# =============================================================================
# Transition rules (first match wins)
# =============================================================================

TransitionGuard = Callable[[Issue, str, Role, State], bool]


def _lead_override(issue: Issue, caller_id: str, role: Role, target: State) -> bool:
    return role == Role.PL


def _developer_fixes(issue: Issue, caller_id: str, role: Role, target: State) -> bool:
    return (
        role == Role.DEV
        and issue.assignee_id is not None
        and issue.assignee_id == caller_id
        and issue.state in (State.ASSIGNED, State.REOPEN)
        and target == State.FIXED
    )


def _reporter_resolves(issue: Issue, caller_id: str, role: Role, target: State) -> bool:
    return (
        role == Role.TESTER
        and issue.assignee_id is not None
        and issue.reporter_id == caller_id
        and issue.state == State.FIXED
        and target == State.RESOLVED
    )


TRANSITION_RULES: tuple[tuple[str, TransitionGuard], ...] = (
    ("lead_override", _lead_override),
    ("developer_fixes", _developer_fixes),
    ("reporter_resolves", _reporter_resolves),
)


def match_transition_rule(
    issue: Issue, caller_id: str, role: Role, target: State
) -> str | None:
    """Name of the first rule allowing the transition, or None."""
    for name, guard in TRANSITION_RULES:
        if guard(issue, caller_id, role, target):
            return name
    return None


# States in which the issue is still open work for its assignee
OPEN_STATES = frozenset({State.NEW, State.ASSIGNED, State.REOPEN})


def _enter_state(issue: Issue, target: State) -> None:
    """Move ``issue`` to ``target``, crediting or clearing the fixer."""
    issue.state = target
    if target == State.FIXED:
        issue.fixer_id = issue.assignee_id
    elif target in OPEN_STATES:
        issue.fixer_id = None


class IssueService:
    """
    Issue operations scoped to a project.

    Callers authenticate the member and resolve their role beforehand; the
    service trusts both.
    """

    def __init__(
        self,
        store: IssueStore,
        recommend_limit: int = 5,
        today: Callable[[], date] = date.today,
    ):
        self.store = store
        self.recommend_limit = recommend_limit
        self._today = today

    def _issue_in_project(self, project_id: int, issue_id: int) -> Issue | None:
        issue = self.store.get_issue(issue_id)
        if issue is None or issue.project_id != project_id:
            return None
        return issue

    # =========================================================================
    # Creation and queries
    # =========================================================================

    def create_issue(
        self, project_id: int, reporter_id: str, title: str, description: str | None
    ) -> bool:
        """
        Report a new issue. It starts NEW with MAJOR priority.

        Any fault while saving is logged and reported as False.
        """
        try:
            project = self.store.get_project(project_id)
            member = self.store.get_member(reporter_id)
            if project is None or member is None:
                return False

            issue = Issue(
                project_id=project.id,
                reporter_id=member.id,
                title=title,
                description=description,
                state=State.NEW,
                priority=Priority.MAJOR,
            )
            self.store.save_issue(issue)
        except Exception as e:
            logger.exception(
                "issue_create_failed",
                project_id=project_id,
                reporter_id=reporter_id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        logger.info("issue_created", project_id=project_id, issue_id=issue.id, reporter_id=reporter_id)
        return True

    def list_issues(
        self,
        project_id: int,
        filter_by: str | None = None,
        filter_value: str | None = None,
    ) -> list[dict]:
        """
        List a project's issues, optionally filtered.

        Args:
            project_id: Project scope
            filter_by: ``title``, ``reporter`` or ``assignee`` (substring,
                ignoring case) or ``state`` (exact state name); any case
            filter_value: Value to match

        Raises:
            InvalidFilterError: Unknown ``filter_by`` or unknown state name
        """
        if not filter_by or not filter_value:
            issues = self.store.issues_by_project(project_id)
        else:
            field = filter_by.lower()
            if field in TEXT_FILTERS:
                issues = self.store.issues_by_project_and_field(project_id, field, filter_value)
            elif field == "state":
                try:
                    state = State[filter_value]
                except KeyError:
                    raise InvalidFilterError(f"Invalid state: {filter_value}") from None
                issues = self.store.issues_by_project_and_state(project_id, state)
            else:
                raise InvalidFilterError(f"Invalid filter criteria: {filter_by}")

        return [issue.to_dict() for issue in issues]

    def get_issue(self, project_id: int, issue_id: int) -> dict | None:
        """The issue, if it exists and belongs to the project."""
        issue = self._issue_in_project(project_id, issue_id)
        return issue.to_dict() if issue else None

    def get_statistic(self, project_id: int) -> IssueStatistic:
        """Count issues created today, this month, in total, and closed."""
        issues = self.store.issues_by_project(project_id)
        today = self._today()

        created = [issue.created_at.date() for issue in issues if issue.created_at is not None]
        return IssueStatistic(
            day=sum(1 for day in created if day == today),
            month=sum(1 for day in created if (day.year, day.month) == (today.year, today.month)),
            total=len(issues),
            closed=sum(1 for issue in issues if issue.state == State.CLOSED),
        )

    def recommend_assignee(self, project_id: int, issue_id: int) -> list[str]:
        """
        Recommend the least loaded developers of the project.

        ``issue_id`` does not narrow the candidates; every developer of the
        project is considered.
        """
        developers = [m.member_id for m in self.store.memberships_by_role(project_id, Role.DEV)]
        scores = score_workloads(developers, self.store.issues_by_project(project_id))
        recommended = rank_candidates(scores, limit=self.recommend_limit)

        logger.debug("assignees_recommended", project_id=project_id, issue_id=issue_id, scores=scores)
        return recommended

    # =========================================================================
    # Mutations
    # =========================================================================

    def assign_issue(
        self, project_id: int, issue_id: int, assignee_id: str, priority: Priority
    ) -> bool:
        """
        Assign a developer of the project and set the priority.

        A NEW issue becomes ASSIGNED; reassigning leaves the state alone.
        """
        membership = self.store.membership(assignee_id, project_id)
        if membership is None or membership.role != Role.DEV:
            return False

        issue = self._issue_in_project(project_id, issue_id)
        if issue is None:
            return False

        issue.assignee_id = membership.member_id
        issue.priority = priority
        if issue.state == State.NEW:
            issue.state = State.ASSIGNED
        self.store.save_issue(issue)

        logger.info(
            "issue_assigned",
            project_id=project_id,
            issue_id=issue_id,
            assignee_id=assignee_id,
            priority=priority.value,
        )
        return True

    def update_issue(
        self,
        caller_id: str,
        project_id: int,
        issue_id: int,
        title: str,
        description: str | None,
    ) -> bool:
        """Overwrite title and description. Only the reporter may edit."""
        issue = self._issue_in_project(project_id, issue_id)
        if issue is None or issue.reporter_id != caller_id:
            return False

        issue.title = title
        issue.description = description
        self.store.save_issue(issue)
        return True

    def update_issue_state(
        self,
        project_id: int,
        issue_id: int,
        caller_id: str,
        caller_role: Role,
        target_state: State,
    ) -> bool:
        """Apply a state change if one of the transition rules allows it."""
        issue = self._issue_in_project(project_id, issue_id)
        if issue is None:
            return False

        rule = match_transition_rule(issue, caller_id, caller_role, target_state)
        if rule is None:
            logger.info(
                "issue_transition_rejected",
                project_id=project_id,
                issue_id=issue_id,
                caller_id=caller_id,
                role=caller_role.value,
                from_state=issue.state.value,
                to_state=target_state.value,
            )
            return False

        from_state = issue.state
        _enter_state(issue, target_state)
        self.store.save_issue(issue)

        logger.info(
            "issue_transitioned",
            project_id=project_id,
            issue_id=issue_id,
            rule=rule,
            from_state=from_state.value,
            to_state=target_state.value,
        )
        return True

    def delete_issue(self, project_id: int, issue_id: int) -> bool:
        """Delete an issue of the project."""
        issue = self._issue_in_project(project_id, issue_id)
        if issue is None:
            return False

        self.store.delete_issue(issue)
        logger.info("issue_deleted", project_id=project_id, issue_id=issue_id)
        return True


__all__ = [
    "InvalidFilterError",
    "IssueService",
    "IssueStatistic",
    "TRANSITION_RULES",
    "match_transition_rule",
]
