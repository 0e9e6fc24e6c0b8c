import os

# must be set before taskboard.config builds its settings
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BACKEND_URL", "http://auth-backend.invalid")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from taskboard.auth.session import AuthenticatedUser
from taskboard.auth.tokens import issue_session_token
from taskboard.db import get_db, init_db, make_engine
from taskboard.main import create_app

@pytest.fixture()
def db_session() -> Session:
    # fresh seeded in-memory store per test
    engine = make_engine("sqlite+pysqlite:///:memory:")
    init_db(bind=engine, seed=True)

    TestingSessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()

@pytest.fixture()
def client(db_session: Session) -> TestClient:
    app = create_app()

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    return TestClient(app, follow_redirects=False)

def make_jwt(
    role: str,
    user_id: str,
    *,
    name: str = "Someone",
    department: str | None = "Development",
) -> str:
    user = AuthenticatedUser.build(
        id=user_id,
        email=f"{user_id}@example.com",
        name=name,
        role=role,
        department=department,
        organization_id="org_1",
        organization_name="Acme",
        access_token=f"backend-{user_id}",
    )
    return issue_session_token(user)

# ids below match the seeded store (see taskboard/seed.py)

@pytest.fixture()
def ceo_jwt() -> str:
    return make_jwt("ceo", "test_user_123", name="Test User")

@pytest.fixture()
def manager_jwt() -> str:
    return make_jwt("Manager", "1", name="John Doe")

@pytest.fixture()
def developer_jwt() -> str:
    return make_jwt("Developer", "2", name="Jane Smith")

@pytest.fixture()
def assistant_manager_jwt() -> str:
    return make_jwt("Assistant Manager", "4", name="Sarah Wilson")

@pytest.fixture()
def intern_jwt() -> str:
    return make_jwt("Intern", "5", name="Alex Chen", department="Design")
