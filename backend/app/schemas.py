"""
Pydantic schemas for request and response validation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.models import Priority, Role, State


# =============================================================================
# Members
# =============================================================================


class MemberCreateRequest(BaseModel):
    id: str = Field(..., min_length=1, max_length=64)
    name: str = Field(..., min_length=1, max_length=255)
    mail: EmailStr
    password: str = Field(..., min_length=1)


class MemberResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    mail: str


# =============================================================================
# Projects
# =============================================================================


class ProjectMemberEntry(BaseModel):
    user_id: str
    role: Role


class ProjectCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    members: list[ProjectMemberEntry] = Field(default_factory=list)


class ProjectUpdateRequest(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    members: list[ProjectMemberEntry] | None = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    project_id: int = Field(validation_alias="id")
    title: str
    created_at: datetime | None = None


class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]


class ProjectCreatedResponse(BaseModel):
    project_id: int


class ProjectMemberResponse(BaseModel):
    user_id: str
    role: Role


# =============================================================================
# Issues
# =============================================================================


class IssueCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=512)
    description: str | None = None


class IssueUpdateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=512)
    description: str | None = None


class IssueAssignRequest(BaseModel):
    assignee_id: str
    priority: Priority


class IssueStateRequest(BaseModel):
    state: State


class IssueResponse(BaseModel):
    id: int
    project_id: int
    title: str
    description: str | None = None
    reporter_id: str
    assignee_id: str | None = None
    fixer_id: str | None = None
    priority: Priority | None = None
    state: State | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None


class IssueStatisticResponse(BaseModel):
    day: int
    month: int
    total: int
    closed: int


class RecommendResponse(BaseModel):
    dev_ids: list[str]


class StatusResponse(BaseModel):
    success: bool = True
