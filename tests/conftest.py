"""
Pytest fixtures for issue tracker tests.

Uses ORM pattern with SQLAlchemy on an in-memory SQLite database.
"""

import os

# Settings are cached on first use; configure them before any app import.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ADMIN_MEMBER_ID", "admin")

import pytest  # noqa: E402
from sqlalchemy import create_engine, event  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from core.db import Base  # noqa: E402
from core.models import Issue, Member, MemberProject, Project, Role  # noqa: E402
from core.security import hash_password  # noqa: E402

from .fakes import InMemoryIssueStore  # noqa: E402


@pytest.fixture(scope="function")
def test_db():
    """Create a fresh in-memory database for each test."""
    db_url = "sqlite://"
    engine = create_engine(
        db_url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

    yield db_url, TestingSessionLocal, engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def test_session(test_db):
    """Get a test session from the test database."""
    _, TestingSessionLocal, _ = test_db
    session = TestingSessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def create_member(session, member_id, password="secret", name=None):
    """Helper to create a member with a hashed password."""
    member = Member(
        id=member_id,
        name=name or member_id.title(),
        mail=f"{member_id}@example.com",
        password=hash_password(password),
    )
    session.add(member)
    session.flush()
    return member


def create_project(session, title="Tracker", members=()):
    """Helper to create a project with (member_id, role) memberships."""
    project = Project(title=title)
    session.add(project)
    session.flush()
    for member_id, role in members:
        session.add(MemberProject(member_id=member_id, project_id=project.id, role=role))
    session.flush()
    return project


def create_issue(session, project_id, reporter_id, title="Crash on save", **fields):
    """Helper to create an issue; defaults to NEW/MAJOR."""
    issue = Issue(project_id=project_id, reporter_id=reporter_id, title=title, **fields)
    session.add(issue)
    session.flush()
    return issue


@pytest.fixture
def seeded_project(test_session):
    """
    A project with one lead, two developers and a tester.

    Returns the project id.
    """
    for member_id in ("lead", "dev1", "dev2", "tester"):
        create_member(test_session, member_id)
    project = create_project(
        test_session,
        members=[
            ("lead", Role.PL),
            ("dev1", Role.DEV),
            ("dev2", Role.DEV),
            ("tester", Role.TESTER),
        ],
    )
    test_session.commit()
    return project.id


@pytest.fixture
def memory_store():
    """In-memory IssueStore with the same roster as ``seeded_project``."""
    store = InMemoryIssueStore()
    for member_id in ("lead", "dev1", "dev2", "tester"):
        store.add_member(member_id)
    project = store.add_project(
        "Tracker",
        [("lead", Role.PL), ("dev1", Role.DEV), ("dev2", Role.DEV), ("tester", Role.TESTER)],
    )
    store.default_project_id = project.id
    return store
