"""
Authentication and role dependencies for FastAPI routes.

Members authenticate on every request with ``id`` and ``pw`` query
parameters. Project-scoped routes then resolve the member's role on the
project from the ``project_id`` path parameter.
"""

from collections.abc import Callable

from fastapi import Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.repositories import MemberProjectRepository, MemberRepository

from ..config import get_settings
from ..database import get_db
from ..models import Member, Role


def get_current_member(
    member_id: str = Query(..., alias="id"),
    password: str = Query(..., alias="pw"),
    db: Session = Depends(get_db),
) -> Member:
    """
    Resolve the authenticated member from id/password.

    Raises 401 when the id is unknown or the password does not match.
    """
    member = MemberRepository(db).authenticate(member_id, password)
    if member is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid id or password",
        )
    return member


def get_project_role(
    project_id: int,
    member: Member = Depends(get_current_member),
    db: Session = Depends(get_db),
) -> Role:
    """The caller's role on the project; 403 when they are not a member."""
    role = MemberProjectRepository(db).get_role(member.id, project_id)
    if role is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this project",
        )
    return role


def require_roles(*roles: Role) -> Callable[..., Role]:
    """
    Dependency factory allowing only the given project roles.

    Usage:
        @router.delete("/{issue_id}")
        def delete_issue(role: Role = Depends(require_roles(Role.PL))): ...
    """

    def dependency(role: Role = Depends(get_project_role)) -> Role:
        if role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Requires role {' or '.join(r.value for r in roles)}",
            )
        return role

    return dependency


def is_admin(member: Member) -> bool:
    """Whether the member may manage projects."""
    return member.id == get_settings().admin_member_id
