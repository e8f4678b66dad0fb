from collections.abc import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from backend.app.database import get_db
from backend.app.main import create_app
from backend.app.models import Role

from ..conftest import create_member, create_project

PASSWORD = "secret"


@pytest.fixture
def test_app_client(test_db) -> Iterator[tuple[TestClient, sessionmaker]]:
    db_url, TestingSessionLocal, engine = test_db

    app = create_app()

    def override_get_db() -> Iterator[Session]:
        db = TestingSessionLocal()
        try:
            yield db
            db.commit()  # Auto-commit on success like production
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client, TestingSessionLocal


@pytest.fixture
def auth() -> Callable[[str], dict]:
    """Query parameters authenticating ``member_id``."""

    def params(member_id: str, **extra) -> dict:
        return {"id": member_id, "pw": PASSWORD, **extra}

    return params


@pytest.fixture
def project_client(test_app_client) -> Iterator[tuple[TestClient, int, sessionmaker]]:
    """
    Client plus a project with lead/dev1/dev2/tester and an admin member.

    Every member's password is ``PASSWORD``.
    """
    client, TestingSessionLocal = test_app_client
    session = TestingSessionLocal()
    for member_id in ("admin", "lead", "dev1", "dev2", "tester", "outsider"):
        create_member(session, member_id, PASSWORD)
    project = create_project(
        session,
        "Tracker",
        [("lead", Role.PL), ("dev1", Role.DEV), ("dev2", Role.DEV), ("tester", Role.TESTER)],
    )
    project_id = project.id
    session.commit()
    session.close()

    yield client, project_id, TestingSessionLocal
