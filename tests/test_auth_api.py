from sqlalchemy.exc import OperationalError
from sqlmodel import select

from freelance_api.core.security import get_password_hash
from freelance_api.models.user import User, UserRole
from freelance_api.services import accounts
from freelance_api.storage import database as database_module

from .conftest import ADMIN_PASSWORD, ADMIN_USERNAME, CLIENT_PASSWORD


def test_login_returns_user_and_token(client):
    resp = client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    assert resp.status_code == 200
    body = resp.json()
    assert body["token"]
    assert body["user"]["username"] == ADMIN_USERNAME
    assert body["user"]["role"] == "admin"
    assert "password" not in body["user"]
    assert "access_token" in resp.cookies


def test_wrong_password_and_unknown_user_look_the_same(client):
    wrong_password = client.post("/api/login", json={"username": ADMIN_USERNAME, "password": "nope-nope"})
    unknown_user = client.post("/api/login", json={"username": "ghost", "password": "nope-nope"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.json() == unknown_user.json() == {"detail": "Invalid credentials"}


def test_login_with_missing_fields_is_a_validation_error(client):
    resp = client.post("/api/login", json={"username": ADMIN_USERNAME})

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "password"


def test_inactive_user_cannot_log_in(client, storage):
    user = User(username="retired", password=get_password_hash(CLIENT_PASSWORD), role=UserRole.CLIENT)
    user.is_active = False
    storage.create_user(user)

    resp = client.post("/api/login", json={"username": "retired", "password": CLIENT_PASSWORD})

    assert resp.status_code == 401


def test_me_returns_the_caller(client, admin_headers):
    resp = client.get("/api/me", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == ADMIN_USERNAME


def test_missing_token_is_401(client):
    resp = client.get("/api/me")

    assert resp.status_code == 401
    assert resp.headers["www-authenticate"] == "Bearer"


def test_garbage_token_is_403(client):
    resp = client.get("/api/me", headers={"Authorization": "Bearer not-a-real-token"})

    assert resp.status_code == 403
    assert resp.json()["detail"] == "Invalid or expired token"


def test_cookie_authentication(client):
    resp = client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200

    # No Authorization header: the login cookie is used
    me = client.get("/api/me")

    assert me.status_code == 200
    assert me.json()["user"]["role"] == "admin"


def test_logout_clears_cookie(client):
    client.post("/api/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})

    resp = client.post("/api/logout")

    assert resp.status_code == 200
    assert client.get("/api/me").status_code == 401


def test_client_cannot_use_admin_routes(client, make_client_user):
    jane = make_client_user("jane")

    resp = client.get("/api/admin/clients", headers=jane.headers)

    assert resp.status_code == 403


def test_register_client_links_account(client, admin_headers, submit_onboarding):
    data = submit_onboarding()

    resp = client.post(
        "/api/register-client",
        json={"username": "jane", "password": CLIENT_PASSWORD, "clientId": data["client"]["id"]},
        headers=admin_headers,
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["user"]["role"] == "client"
    assert body["data"]["clientId"] == data["client"]["id"]
    # SMTP is disabled in tests
    assert body["data"]["notificationSent"] is False

    detail = client.get(f"/api/admin/clients/{data['client']['id']}", headers=admin_headers).json()
    assert detail["client"]["userId"] == body["data"]["user"]["id"]


def test_register_client_sends_notification(client, admin_headers, submit_onboarding, monkeypatch):
    sent = []

    def fake_notification(email, name, username, portal_url):
        sent.append((email, name, username))
        return True

    monkeypatch.setattr(accounts, "send_client_account_notification", fake_notification)
    data = submit_onboarding()

    resp = client.post(
        "/api/register-client",
        json={"username": "jane", "password": CLIENT_PASSWORD, "clientId": data["client"]["id"]},
        headers=admin_headers,
    )

    assert resp.status_code == 201
    assert resp.json()["data"]["notificationSent"] is True
    assert sent == [("jane@x.com", "Jane Doe", "jane")]


def test_register_client_for_missing_client_is_404(client, admin_headers):
    resp = client.post(
        "/api/register-client",
        json={"username": "jane", "password": CLIENT_PASSWORD, "clientId": 999},
        headers=admin_headers,
    )

    assert resp.status_code == 404
    assert client.post("/api/login", json={"username": "jane", "password": CLIENT_PASSWORD}).status_code == 401


def test_register_client_twice_conflicts(client, admin_headers, make_client_user):
    jane = make_client_user("jane")

    resp = client.post(
        "/api/register-client",
        json={"username": "jane2", "password": CLIENT_PASSWORD, "clientId": jane.client_id},
        headers=admin_headers,
    )

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Client already has an account"


def test_register_client_with_taken_username_conflicts(client, admin_headers, submit_onboarding):
    data = submit_onboarding()

    resp = client.post(
        "/api/register-client",
        json={"username": ADMIN_USERNAME, "password": CLIENT_PASSWORD, "clientId": data["client"]["id"]},
        headers=admin_headers,
    )

    assert resp.status_code == 409
    assert resp.json()["detail"] == "Username already taken"


def test_register_client_requires_admin(client, make_client_user, submit_onboarding):
    jane = make_client_user("jane")
    other = submit_onboarding(email="other@x.com")

    resp = client.post(
        "/api/register-client",
        json={"username": "sneaky", "password": CLIENT_PASSWORD, "clientId": other["client"]["id"]},
        headers=jane.headers,
    )

    assert resp.status_code == 403


def test_failed_registration_leaves_no_user_and_can_be_retried(client, admin_headers, submit_onboarding, session, monkeypatch):
    data = submit_onboarding()
    payload = {"username": "jane", "password": CLIENT_PASSWORD, "clientId": data["client"]["id"]}

    def broken_update(*args, **kwargs):
        raise OperationalError("UPDATE clients", {}, Exception("database is locked"))

    with monkeypatch.context() as patch:
        patch.setattr(database_module, "update", broken_update)
        failed = client.post("/api/register-client", json=payload, headers=admin_headers)

    assert failed.status_code == 500
    assert failed.json() == {"detail": "Internal server error"}
    assert session.exec(select(User).where(User.username == "jane")).all() == []

    retry = client.post("/api/register-client", json=payload, headers=admin_headers)

    assert retry.status_code == 201
    assert client.post("/api/login", json={"username": "jane", "password": CLIENT_PASSWORD}).status_code == 200
