import pytest
import os
import sys

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# settings are read at import time, so this has to happen before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from course_catalog.infrastructure.db import get_db
from course_catalog.infrastructure.models import Base
from course_catalog.infrastructure.repositories import UserRepository, CourseRepository
from course_catalog.infrastructure.security import PasswordHasher
from course_catalog.main import app

# One in-memory database shared by every connection
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

PASSWORD = "correct horse battery staple"


@pytest.fixture(autouse=True)
def database():
    """Fresh tables for every test"""
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def stored_course():
    """Read a course back through a new session, bypassing any identity map"""
    def _stored_course(course_id):
        session = TestingSessionLocal()
        try:
            return CourseRepository(session).get(course_id)
        finally:
            session.close()
    return _stored_course


@pytest.fixture
def make_user(db):
    """Insert a user straight through the repository and return it"""
    def _make_user(email, first_name="Test", last_name="User", password=PASSWORD):
        return UserRepository(db).create(first_name, last_name, email, PasswordHasher().hash(password))
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user("alice@example.com", "Alice", "Smith")


@pytest.fixture
def bob(make_user):
    return make_user("bob@example.com", "Bob", "Jones")


@pytest.fixture
def alice_auth(alice):
    return (alice.email_address, PASSWORD)


@pytest.fixture
def bob_auth(bob):
    return (bob.email_address, PASSWORD)


@pytest.fixture
def alice_course(db, alice):
    return CourseRepository(db).create(
        user_id=alice.id,
        title="Build a Basic Bookcase",
        description="High-end furniture projects are great to dream about.",
        estimated_time="12 hours",
        materials_needed="* 1/2 x 3/4 inch parting strip",
    )
