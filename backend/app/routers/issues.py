"""
Issue endpoints, scoped to a project.

Authentication and role lookup happen here; the lifecycle rules themselves
live in core.services.IssueService. Service failures map to:
    False / None  -> 400 (404 for deletes)
    InvalidFilterError -> 400
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from core.logging import get_logger
from core.services import InvalidFilterError, IssueService

from ..auth.dependencies import get_current_member, get_project_role, require_roles
from ..dependencies import get_issue_service
from ..models import Member, Role
from ..schemas import (
    IssueAssignRequest,
    IssueCreateRequest,
    IssueResponse,
    IssueStateRequest,
    IssueStatisticResponse,
    IssueUpdateRequest,
    RecommendResponse,
    StatusResponse,
)

router = APIRouter(prefix="/projects/{project_id}/issues", tags=["issues"])

logger = get_logger("api.issues")


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# =============================================================================
# Reporting and queries
# =============================================================================


@router.post("", response_model=StatusResponse)
def create_issue(
    project_id: int,
    request: IssueCreateRequest,
    member: Member = Depends(get_current_member),
    _: Role = Depends(require_roles(Role.TESTER)),
    service: IssueService = Depends(get_issue_service),
):
    """Report an issue. Only testers of the project may report."""
    if not service.create_issue(project_id, member.id, request.title, request.description):
        raise _bad_request("Issue could not be created")
    return StatusResponse()


@router.get("", response_model=list[IssueResponse])
def list_issues(
    project_id: int,
    filter_by: str | None = Query(None, description="title, reporter, assignee or state"),
    filter_value: str | None = Query(None),
    _: Role = Depends(get_project_role),
    service: IssueService = Depends(get_issue_service),
):
    """List the project's issues, optionally filtered."""
    try:
        issues = service.list_issues(project_id, filter_by, filter_value)
    except InvalidFilterError as e:
        logger.info("issue_filter_rejected", project_id=project_id, filter_by=filter_by, filter_value=filter_value)
        raise _bad_request(str(e)) from None
    return [IssueResponse(**issue) for issue in issues]


@router.get("/statistic", response_model=IssueStatisticResponse)
def get_statistic(
    project_id: int,
    _: Role = Depends(get_project_role),
    service: IssueService = Depends(get_issue_service),
):
    """Issue counts for today, this month, in total, and closed."""
    return IssueStatisticResponse(**service.get_statistic(project_id).to_dict())


@router.get("/{issue_id}", response_model=IssueResponse)
def get_issue(
    project_id: int,
    issue_id: int,
    _: Role = Depends(get_project_role),
    service: IssueService = Depends(get_issue_service),
):
    """Get a single issue of the project."""
    issue = service.get_issue(project_id, issue_id)
    if issue is None:
        raise _bad_request("Issue not found")
    return IssueResponse(**issue)


@router.get("/{issue_id}/recommend", response_model=RecommendResponse)
def recommend_assignee(
    project_id: int,
    issue_id: int,
    _: Role = Depends(require_roles(Role.PL)),
    service: IssueService = Depends(get_issue_service),
):
    """Developers with the lightest open workload, best first."""
    return RecommendResponse(dev_ids=service.recommend_assignee(project_id, issue_id))


# =============================================================================
# Changes
# =============================================================================


@router.put("/{issue_id}/assign", response_model=StatusResponse)
def assign_issue(
    project_id: int,
    issue_id: int,
    request: IssueAssignRequest,
    _: Role = Depends(require_roles(Role.PL)),
    service: IssueService = Depends(get_issue_service),
):
    """Assign a developer and set the priority."""
    if not service.assign_issue(project_id, issue_id, request.assignee_id, request.priority):
        raise _bad_request("Issue could not be assigned")
    return StatusResponse()


@router.put("/{issue_id}/state", response_model=StatusResponse)
def update_issue_state(
    project_id: int,
    issue_id: int,
    request: IssueStateRequest,
    member: Member = Depends(get_current_member),
    role: Role = Depends(get_project_role),
    service: IssueService = Depends(get_issue_service),
):
    """Move the issue to another state if the caller's role allows it."""
    if not service.update_issue_state(project_id, issue_id, member.id, role, request.state):
        raise _bad_request("State change not allowed")
    return StatusResponse()


@router.put("/{issue_id}", response_model=StatusResponse)
def update_issue(
    project_id: int,
    issue_id: int,
    request: IssueUpdateRequest,
    member: Member = Depends(get_current_member),
    _: Role = Depends(get_project_role),
    service: IssueService = Depends(get_issue_service),
):
    """Edit title and description. Only the reporter may edit."""
    if not service.update_issue(member.id, project_id, issue_id, request.title, request.description):
        raise _bad_request("Issue could not be updated")
    return StatusResponse()


@router.delete("/{issue_id}", response_model=StatusResponse)
def delete_issue(
    project_id: int,
    issue_id: int,
    _: Role = Depends(require_roles(Role.PL)),
    service: IssueService = Depends(get_issue_service),
):
    """Delete an issue of the project."""
    if not service.delete_issue(project_id, issue_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Issue not found")
    return StatusResponse()
