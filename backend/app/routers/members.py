"""Member sign-up and lookup."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.repositories import MemberRepository

from ..auth.dependencies import get_current_member
from ..database import get_db
from ..dependencies import get_member_repository
from ..models import Member
from ..schemas import MemberCreateRequest, MemberResponse

router = APIRouter(prefix="/members", tags=["members"])


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def sign_up(
    request: MemberCreateRequest,
    repo: MemberRepository = Depends(get_member_repository),
    db: Session = Depends(get_db),
):
    """Register a new member. 409 when the id is taken."""
    member = repo.register(request.id, request.name, request.mail, request.password)
    if member is None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Member id already exists")
    db.commit()
    return MemberResponse.model_validate(member)


@router.get("/me", response_model=MemberResponse)
def get_me(member: Member = Depends(get_current_member)):
    return MemberResponse.model_validate(member)
