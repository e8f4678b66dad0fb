"""
Project management endpoints.

Creating, renaming and deleting projects is reserved to the admin member
(``ADMIN_MEMBER_ID``). Any member may list the projects they belong to.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.logging import get_logger
from core.repositories import MemberProjectRepository, ProjectRepository

from ..auth.dependencies import get_current_member, is_admin
from ..database import get_db
from ..dependencies import get_member_project_repository, get_project_repository
from ..models import Member, Project
from ..schemas import (
    ProjectCreatedResponse,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectMemberResponse,
    ProjectResponse,
    ProjectUpdateRequest,
    StatusResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])

logger = get_logger("api.projects")


def _get_project_or_404(repo: ProjectRepository, project_id: int) -> Project:
    project = repo.get_by_id(project_id)
    if project is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Project not found")
    return project


def _require_admin(member: Member, status_code: int) -> None:
    if not is_admin(member):
        logger.warning("project_admin_required", member_id=member.id)
        raise HTTPException(status_code=status_code, detail="Admin only")


@router.post("", response_model=ProjectCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_project(
    request: ProjectCreateRequest,
    member: Member = Depends(get_current_member),
    repo: ProjectRepository = Depends(get_project_repository),
    db: Session = Depends(get_db),
):
    """Create a project with its initial member roster."""
    _require_admin(member, status.HTTP_400_BAD_REQUEST)
    project = repo.create_with_members(
        request.title,
        ((entry.user_id, entry.role) for entry in request.members),
    )
    db.commit()
    return ProjectCreatedResponse(project_id=project.id)


@router.get("", response_model=ProjectListResponse)
def list_projects(
    member: Member = Depends(get_current_member),
    repo: ProjectRepository = Depends(get_project_repository),
):
    """Projects the caller is a member of."""
    projects = repo.list_for_member(member.id)
    return ProjectListResponse(projects=[ProjectResponse.model_validate(p) for p in projects])


@router.put("/{project_id}", response_model=StatusResponse)
def update_project(
    project_id: int,
    request: ProjectUpdateRequest,
    member: Member = Depends(get_current_member),
    repo: ProjectRepository = Depends(get_project_repository),
    db: Session = Depends(get_db),
):
    """Rename the project and/or replace its member roster."""
    _require_admin(member, status.HTTP_401_UNAUTHORIZED)
    project = _get_project_or_404(repo, project_id)

    if request.title is not None:
        project.title = request.title
    if request.members is not None:
        repo.replace_members(project, ((entry.user_id, entry.role) for entry in request.members))

    db.commit()
    logger.info("project_updated", project_id=project_id)
    return StatusResponse()


@router.delete("/{project_id}", response_model=StatusResponse)
def delete_project(
    project_id: int,
    member: Member = Depends(get_current_member),
    repo: ProjectRepository = Depends(get_project_repository),
    db: Session = Depends(get_db),
):
    """Delete the project together with its memberships and issues."""
    _require_admin(member, status.HTTP_401_UNAUTHORIZED)
    project = _get_project_or_404(repo, project_id)
    repo.remove(project)
    db.commit()
    logger.info("project_deleted", project_id=project_id)
    return StatusResponse()


@router.get("/{project_id}/members", response_model=list[ProjectMemberResponse])
def list_project_members(
    project_id: int,
    _: Member = Depends(get_current_member),
    repo: ProjectRepository = Depends(get_project_repository),
    memberships: MemberProjectRepository = Depends(get_member_project_repository),
):
    """Member ids and roles on the project."""
    _get_project_or_404(repo, project_id)
    return [
        ProjectMemberResponse(user_id=m.member_id, role=m.role)
        for m in memberships.find_by_project(project_id)
    ]
