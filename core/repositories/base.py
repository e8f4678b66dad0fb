"""Base repository with the lookups and writes shared by every repository."""

from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository bound to one session and one model.

    Usage:
        class ProjectRepository(BaseRepository[Project]):
            model = Project

        repo = ProjectRepository(session)
        project = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: Any) -> T | None:
        """Get a single record by primary key."""
        return self.session.get(self.model, id)

    def exists(self, id: Any) -> bool:
        return self.get_by_id(id) is not None

    def save(self, instance: T) -> T:
        """Insert or update an instance. Saving an unchanged instance is a no-op."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def remove(self, instance: T) -> None:
        """Delete an instance. Removing one that is already gone is a no-op."""
        if instance in self.session:
            self.session.delete(instance)
            self.session.flush()
