# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from minijira.core.database import build_engine, get_db
from minijira.main import app
from minijira.models import init_db
from minijira.seed import DEFAULT_PASSWORD, seed_defaults_if_empty

# Seeded ids, in insertion order
ADMIN_ID, JANE_ID, JOHN_ID = 1, 2, 3
MJ_PROJECT_ID, WEB_PROJECT_ID = 1, 2


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with factory() as db:
        seed_defaults_if_empty(db)
    yield factory
    engine.dispose()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def token(client) -> str:
    r = client.post(
        "/api/auth/login",
        json={"email": "admin@minijira.local", "password": DEFAULT_PASSWORD},
    )
    assert r.status_code == 200
    return r.json()["token"]


@pytest.fixture
def auth(token) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_ticket(client, auth):
    def _make(**overrides):
        body = {"title": "Ticket", "description": "Body", "projectId": MJ_PROJECT_ID}
        body.update(overrides)
        r = client.post("/api/tickets", json=body, headers=auth)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
