"""Pytest configuration and fixtures."""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from src.database import Base, engine_options, get_db  # noqa: E402
from src.main import app  # noqa: E402
from src.models.enums import Role  # noqa: E402
from src.models.user import User  # noqa: E402
from src.services.auth import create_access_token, get_password_hash  # noqa: E402

TEST_PASSWORD = "password123"  # noqa: S105


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: int | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


# Use test database - PostgreSQL in Docker, SQLite locally
if os.getenv("DATABASE_URL"):
    # Running in Docker - use PostgreSQL test database
    SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL").replace(
        "/task_tracker", "/task_tracker_test"
    )
else:
    # Running locally - use SQLite
    SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(SQLALCHEMY_DATABASE_URL, **engine_options(SQLALCHEMY_DATABASE_URL))
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    if "postgresql" in SQLALCHEMY_DATABASE_URL:
        from sqlalchemy_utils import create_database, database_exists

        if not database_exists(SQLALCHEMY_DATABASE_URL):
            create_database(SQLALCHEMY_DATABASE_URL)

    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture(scope="function")
def client(db):
    """Create a test client with database override."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    """Factory that inserts a user directly and returns bearer auth headers for it."""

    def _make_user(email: str, name: str = "Test User", role: Role = Role.USER) -> AuthHeaders:
        user = User(
            name=name,
            email=email,
            password_hash=get_password_hash(TEST_PASSWORD),
            role=role,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        token = create_access_token(user.id, user.role)
        return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user.id, email=user.email)

    return _make_user


@pytest.fixture
def auth_headers(client):
    """Register a user through the API and return bearer auth headers for it."""
    response = client.post(
        "/api/v1/auth/register",
        json={"name": "Test User", "email": "test@example.com", "password": TEST_PASSWORD},
    )
    assert response.status_code == 201
    token = response.cookies["access_token"]
    user = response.json()["user"]

    # The cookie would take precedence over any bearer header in later requests
    client.cookies.clear()

    return AuthHeaders({"Authorization": f"Bearer {token}"}, user_id=user["id"], email=user["email"])


@pytest.fixture
def user_a(make_user):
    return make_user("usera@example.com", name="User A")


@pytest.fixture
def user_b(make_user):
    return make_user("userb@example.com", name="User B")


@pytest.fixture
def admin_headers(make_user):
    return make_user("admin@example.com", name="Admin User", role=Role.ADMIN)
