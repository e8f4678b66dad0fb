"""Member and membership repositories."""

from core.logging import get_logger
from core.models import Member, MemberProject, Role
from core.security import hash_password, verify_password

from .base import BaseRepository

logger = get_logger("repository.member")


class MemberRepository(BaseRepository[Member]):
    """Repository for Member operations."""

    model = Member

    def register(self, member_id: str, name: str, mail: str, password: str) -> Member | None:
        """
        Create a member with a hashed password.

        Returns None when the id is already taken.
        """
        if self.exists(member_id):
            return None

        member = Member(id=member_id, name=name, mail=mail, password=hash_password(password))
        self.session.add(member)
        self.session.flush()
        logger.info("member_registered", member_id=member_id)
        return member

    def authenticate(self, member_id: str, password: str) -> Member | None:
        """Return the member when the id exists and the password matches."""
        member = self.get_by_id(member_id)
        if member is None or not verify_password(password, member.password):
            return None
        return member


class MemberProjectRepository(BaseRepository[MemberProject]):
    """Repository for project memberships."""

    model = MemberProject

    def find_by_member_and_project(self, member_id: str, project_id: int) -> MemberProject | None:
        """The membership row of one member on one project, if any."""
        return (
            self.session.query(MemberProject)
            .filter(
                MemberProject.member_id == member_id,
                MemberProject.project_id == project_id,
            )
            .first()
        )

    def find_by_project_and_role(self, project_id: int, role: Role) -> list[MemberProject]:
        """Memberships holding ``role`` on a project, ordered by member id."""
        return (
            self.session.query(MemberProject)
            .filter(MemberProject.project_id == project_id, MemberProject.role == role)
            .order_by(MemberProject.member_id)
            .all()
        )

    def find_by_project(self, project_id: int) -> list[MemberProject]:
        """All memberships of a project in insertion order."""
        return (
            self.session.query(MemberProject)
            .filter(MemberProject.project_id == project_id)
            .order_by(MemberProject.id)
            .all()
        )

    def get_role(self, member_id: str, project_id: int) -> Role | None:
        """The member's role on the project, or None when not a member."""
        membership = self.find_by_member_and_project(member_id, project_id)
        return membership.role if membership else None
