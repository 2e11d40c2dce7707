from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel

from freelance_api.core.config import settings
from freelance_api.db.session import create_db_engine, get_db, init_db
from freelance_api.main import app
from freelance_api.schemas.client import ClientProjectSubmission
from freelance_api.services.accounts import ensure_admin_user
from freelance_api.storage import DatabaseStorage

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-test-password"
CLIENT_PASSWORD = "client-pass-123"

JANE_SUBMISSION = {
    "fullName": "Jane Doe",
    "email": "jane@x.com",
    "phone": "555-0100",
    "projectType": "website",
    "description": "Need a 10-page site",
    "budget": "1000-3000",
    "timeline": "2-4-weeks",
    "termsAgreed": True,
}


@pytest.fixture(autouse=True)
def _test_settings(monkeypatch, tmp_path):
    """Point settings at throwaway locations and disable outgoing e-mail."""
    monkeypatch.setattr(settings, "ADMIN_USERNAME", ADMIN_USERNAME)
    monkeypatch.setattr(settings, "ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.setattr(settings, "SMTP_HOST", None)


@pytest.fixture
def engine():
    """A private in-memory SQLite database per test."""
    test_engine = create_db_engine("sqlite://", poolclass=StaticPool)
    init_db(test_engine)
    yield test_engine
    SQLModel.metadata.drop_all(test_engine)
    test_engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def storage(session):
    return DatabaseStorage(session)


@pytest.fixture
def admin_user(storage):
    return ensure_admin_user(storage)


@pytest.fixture
def client(engine, admin_user):
    """
    In-process TestClient wired to the test database.

    Not used as a context manager, so the production lifespan (which talks to
    the configured database) never runs.
    """
    def override_get_db():
        with Session(engine) as db_session:
            yield db_session

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    """Log in through the API and return bearer headers for the user."""
    def _login(username: str, password: str) -> dict:
        resp = client.post("/api/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        # Keep requests explicit: authentication comes from headers, not the login cookie
        client.cookies.clear()
        return {"Authorization": f"Bearer {resp.json()['token']}"}

    return _login


@pytest.fixture
def admin_headers(login):
    return login(ADMIN_USERNAME, ADMIN_PASSWORD)


@pytest.fixture
def submit_onboarding(client):
    def _submit(**overrides) -> dict:
        resp = client.post("/api/client-onboarding", json={**JANE_SUBMISSION, **overrides})
        assert resp.status_code == 201, resp.text
        return resp.json()["data"]

    return _submit


@pytest.fixture
def make_client_user(client, admin_headers, login, submit_onboarding):
    """Submit an onboarding form, create a login for that client and log in as it."""
    def _make(username: str, **overrides) -> SimpleNamespace:
        data = submit_onboarding(**overrides)
        resp = client.post(
            "/api/register-client",
            json={"username": username, "password": CLIENT_PASSWORD, "clientId": data["client"]["id"]},
            headers=admin_headers,
        )
        assert resp.status_code == 201, resp.text
        return SimpleNamespace(
            user_id=resp.json()["data"]["user"]["id"],
            client_id=data["client"]["id"],
            project_id=data["project"]["id"],
            headers=login(username, CLIENT_PASSWORD),
        )

    return _make


@pytest.fixture
def make_submission():
    def _make(**overrides) -> ClientProjectSubmission:
        return ClientProjectSubmission.model_validate({**JANE_SUBMISSION, **overrides})

    return _make
