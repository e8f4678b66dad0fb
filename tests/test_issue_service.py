"""
Tests for IssueService against the in-memory store.

Covers:
- Creation defaults and failure handling
- List filters
- Assignment and edits
- Role-gated state transitions
- Deletion
"""

import pytest

from core.models import Priority, Role, State
from core.services import InvalidFilterError, IssueService
from core.services.issue_service import match_transition_rule


@pytest.fixture
def service(memory_store):
    return IssueService(memory_store)


@pytest.fixture
def pid(memory_store):
    return memory_store.default_project_id


def _assigned_issue(store, pid, assignee="dev1", state=State.ASSIGNED, **fields):
    return store.add_issue(pid, "tester", assignee_id=assignee, state=state, **fields)


class TestCreateIssue:
    def test_new_issue_defaults(self, service, memory_store, pid):
        assert service.create_issue(pid, "tester", "Crash on save", "Steps...") is True

        [issue] = memory_store.issues_by_project(pid)
        assert issue.state == State.NEW
        assert issue.priority == Priority.MAJOR
        assert issue.reporter_id == "tester"
        assert issue.project_id == pid
        assert issue.assignee_id is None
        assert issue.fixer_id is None

    def test_unknown_project(self, service, memory_store):
        assert service.create_issue(999, "tester", "Crash", None) is False
        assert memory_store.issues == {}

    def test_unknown_reporter(self, service, memory_store, pid):
        assert service.create_issue(pid, "ghost", "Crash", None) is False
        assert memory_store.issues == {}

    def test_store_failure_reports_false(self, service, memory_store, pid):
        memory_store.fail_on_save = True

        assert service.create_issue(pid, "tester", "Crash", None) is False
        assert memory_store.issues == {}


class TestListIssues:
    @pytest.fixture
    def issues(self, memory_store, pid):
        first = memory_store.add_issue(pid, "tester", title="Login button broken", state=State.NEW)
        second = _assigned_issue(memory_store, pid, "dev1", title="Crash on LOGIN")
        third = _assigned_issue(memory_store, pid, "dev2", title="Slow search", state=State.CLOSED)
        return first, second, third

    def test_unfiltered_in_id_order(self, service, pid, issues):
        result = service.list_issues(pid)
        assert [i["id"] for i in result] == [issue.id for issue in issues]

    @pytest.mark.parametrize("filter_by, filter_value", [(None, "x"), ("title", None), ("", ""), ("title", "")])
    def test_missing_filter_part_returns_all(self, service, pid, issues, filter_by, filter_value):
        assert len(service.list_issues(pid, filter_by, filter_value)) == 3

    def test_title_substring_ignores_case(self, service, pid, issues):
        result = service.list_issues(pid, "title", "login")
        assert [i["title"] for i in result] == ["Login button broken", "Crash on LOGIN"]

    def test_field_name_ignores_case(self, service, pid, issues):
        assert len(service.list_issues(pid, "TiTle", "slow")) == 1

    def test_reporter_filter(self, service, pid, issues):
        assert len(service.list_issues(pid, "reporter", "TEST")) == 3
        assert service.list_issues(pid, "reporter", "dev") == []

    def test_assignee_filter_skips_unassigned(self, service, pid, issues):
        result = service.list_issues(pid, "assignee", "dev")
        assert [i["assignee_id"] for i in result] == ["dev1", "dev2"]

    def test_state_filter(self, service, pid, issues):
        result = service.list_issues(pid, "state", "CLOSED")
        assert [i["title"] for i in result] == ["Slow search"]

    @pytest.mark.parametrize("value", ["BOGUS", "closed"])
    def test_unknown_state_raises(self, service, pid, issues, value):
        with pytest.raises(InvalidFilterError):
            service.list_issues(pid, "state", value)

    def test_unknown_field_raises(self, service, pid, issues):
        with pytest.raises(InvalidFilterError, match="Invalid filter criteria"):
            service.list_issues(pid, "priority", "MAJOR")

    def test_other_projects_excluded(self, service, memory_store, pid, issues):
        other = memory_store.add_project("Other", [("tester", Role.TESTER)])
        memory_store.add_issue(other.id, "tester", title="Login elsewhere")

        assert len(service.list_issues(pid, "title", "login")) == 2


class TestGetIssue:
    def test_found(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester", title="Typo")
        result = service.get_issue(pid, issue.id)
        assert result["title"] == "Typo"
        assert result["state"] == "NEW"

    def test_missing(self, service, pid):
        assert service.get_issue(pid, 42) is None

    def test_other_project(self, service, memory_store, pid):
        other = memory_store.add_project("Other")
        issue = memory_store.add_issue(other.id, "tester")
        assert service.get_issue(pid, issue.id) is None


class TestAssignIssue:
    def test_new_becomes_assigned(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester")

        assert service.assign_issue(pid, issue.id, "dev1", Priority.CRITICAL) is True
        assert issue.state == State.ASSIGNED
        assert issue.assignee_id == "dev1"
        assert issue.priority == Priority.CRITICAL

    def test_reassignment_keeps_state(self, service, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1", state=State.FIXED)

        assert service.assign_issue(pid, issue.id, "dev2", Priority.MINOR) is True
        assert issue.state == State.FIXED
        assert issue.assignee_id == "dev2"
        assert issue.priority == Priority.MINOR

    @pytest.mark.parametrize("assignee", ["tester", "lead", "ghost"])
    def test_assignee_must_be_project_developer(self, service, memory_store, pid, assignee):
        issue = memory_store.add_issue(pid, "tester")

        assert service.assign_issue(pid, issue.id, assignee, Priority.MAJOR) is False
        assert issue.state == State.NEW
        assert issue.assignee_id is None

    def test_issue_in_other_project(self, service, memory_store, pid):
        other = memory_store.add_project("Other", [("dev1", Role.DEV)])
        issue = memory_store.add_issue(other.id, "tester")

        assert service.assign_issue(pid, issue.id, "dev1", Priority.MAJOR) is False


class TestUpdateIssue:
    def test_reporter_edits(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester", title="Old", description="old")

        assert service.update_issue("tester", pid, issue.id, "New", "new") is True
        assert (issue.title, issue.description) == ("New", "new")

    def test_only_reporter(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester", title="Old")

        assert service.update_issue("lead", pid, issue.id, "New", None) is False
        assert issue.title == "Old"

    def test_missing_issue(self, service, pid):
        assert service.update_issue("tester", pid, 7, "New", None) is False


class TestUpdateIssueState:
    @pytest.mark.parametrize("start", list(State))
    @pytest.mark.parametrize("target", [State.CLOSED, State.REOPEN, State.NEW])
    def test_lead_moves_anything(self, service, memory_store, pid, start, target):
        issue = memory_store.add_issue(pid, "tester", state=start)

        assert service.update_issue_state(pid, issue.id, "lead", Role.PL, target) is True
        assert issue.state == target

    @pytest.mark.parametrize("start", [State.ASSIGNED, State.REOPEN])
    def test_assigned_developer_fixes(self, service, memory_store, pid, start):
        issue = _assigned_issue(memory_store, pid, "dev1", state=start)

        assert service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED) is True
        assert issue.state == State.FIXED
        assert issue.fixer_id == "dev1"

    def test_developer_not_assignee(self, service, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1")

        assert service.update_issue_state(pid, issue.id, "dev2", Role.DEV, State.FIXED) is False
        assert issue.state == State.ASSIGNED

    @pytest.mark.parametrize("target", [State.RESOLVED, State.CLOSED, State.REOPEN])
    def test_developer_only_fixes(self, service, memory_store, pid, target):
        issue = _assigned_issue(memory_store, pid, "dev1")

        assert service.update_issue_state(pid, issue.id, "dev1", Role.DEV, target) is False

    @pytest.mark.parametrize("start", [State.NEW, State.FIXED, State.RESOLVED, State.CLOSED])
    def test_developer_wrong_start_state(self, service, memory_store, pid, start):
        issue = _assigned_issue(memory_store, pid, "dev1", state=start)

        assert service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED) is False
        assert issue.state == start

    def test_reporter_resolves_fixed_issue(self, service, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1", state=State.FIXED)

        assert service.update_issue_state(pid, issue.id, "tester", Role.TESTER, State.RESOLVED) is True
        assert issue.state == State.RESOLVED

    def test_tester_not_reporter(self, service, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1", state=State.FIXED)

        assert service.update_issue_state(pid, issue.id, "tester2", Role.TESTER, State.RESOLVED) is False

    def test_tester_needs_assignee(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester", state=State.FIXED)

        assert service.update_issue_state(pid, issue.id, "tester", Role.TESTER, State.RESOLVED) is False
        assert issue.state == State.FIXED

    @pytest.mark.parametrize("target", [State.CLOSED, State.REOPEN])
    def test_tester_only_resolves(self, service, memory_store, pid, target):
        issue = _assigned_issue(memory_store, pid, "dev1", state=State.FIXED)

        assert service.update_issue_state(pid, issue.id, "tester", Role.TESTER, target) is False

    def test_reopen_clears_fixer(self, service, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1")
        service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED)

        assert service.update_issue_state(pid, issue.id, "lead", Role.PL, State.REOPEN) is True
        assert issue.fixer_id is None

        assert service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED) is True
        assert issue.fixer_id == "dev1"

    @pytest.mark.parametrize("target", [State.ASSIGNED, State.NEW])
    def test_lead_undoing_fix_clears_fixer(self, service, memory_store, pid, target):
        issue = _assigned_issue(memory_store, pid, "dev1", priority=Priority.BLOCKER)
        service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED)

        assert service.update_issue_state(pid, issue.id, "lead", Role.PL, target) is True
        assert issue.fixer_id is None
        # The BLOCKER counts against dev1 again
        assert service.recommend_assignee(pid, issue.id) == ["dev2", "dev1"]

    @pytest.mark.parametrize("target", [State.RESOLVED, State.CLOSED])
    def test_fixer_kept_after_fix(self, service, memory_store, pid, target):
        issue = _assigned_issue(memory_store, pid, "dev1")
        service.update_issue_state(pid, issue.id, "dev1", Role.DEV, State.FIXED)

        assert service.update_issue_state(pid, issue.id, "lead", Role.PL, target) is True
        assert issue.fixer_id == "dev1"

    def test_missing_issue(self, service, pid):
        assert service.update_issue_state(pid, 3, "lead", Role.PL, State.CLOSED) is False


class TestMatchTransitionRule:
    def test_first_match_wins(self, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1")
        assert match_transition_rule(issue, "dev1", Role.PL, State.FIXED) == "lead_override"
        assert match_transition_rule(issue, "dev1", Role.DEV, State.FIXED) == "developer_fixes"

    def test_no_match(self, memory_store, pid):
        issue = _assigned_issue(memory_store, pid, "dev1")
        assert match_transition_rule(issue, "tester", Role.TESTER, State.RESOLVED) is None


class TestDeleteIssue:
    def test_delete(self, service, memory_store, pid):
        issue = memory_store.add_issue(pid, "tester")

        assert service.delete_issue(pid, issue.id) is True
        assert memory_store.get_issue(issue.id) is None

    def test_other_project_untouched(self, service, memory_store, pid):
        other = memory_store.add_project("Other")
        issue = memory_store.add_issue(other.id, "tester")

        assert service.delete_issue(pid, issue.id) is False
        assert memory_store.get_issue(issue.id) is issue
