from .conftest import JANE_SUBMISSION


def test_onboarding_creates_client_and_pending_project(client, admin_headers):
    resp = client.post("/api/client-onboarding", json=JANE_SUBMISSION)

    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["message"] == "Project request submitted successfully"
    assert body["data"]["client"]["fullName"] == "Jane Doe"
    assert body["data"]["client"]["userId"] is None
    assert body["data"]["project"]["status"] == "pending"
    assert body["data"]["project"]["clientId"] == body["data"]["client"]["id"]

    clients = client.get("/api/admin/clients", headers=admin_headers).json()
    assert [c["email"] for c in clients] == ["jane@x.com"]


def test_onboarding_keeps_optional_fields(client):
    resp = client.post(
        "/api/client-onboarding",
        json={
            **JANE_SUBMISSION,
            "company": "Doe Ltd",
            "features": ["blog", "shop"],
            "startDate": "2026-11-01",
            "additionalRequirements": "Dark mode",
        },
    )

    project = resp.json()["data"]["project"]
    assert project["features"] == ["blog", "shop"]
    assert project["startDate"] == "2026-11-01"
    assert project["additionalRequirements"] == "Dark mode"
    assert resp.json()["data"]["client"]["company"] == "Doe Ltd"


def test_onboarding_without_terms_is_rejected(client, admin_headers):
    resp = client.post("/api/client-onboarding", json={**JANE_SUBMISSION, "termsAgreed": False})

    assert resp.status_code == 400
    body = resp.json()
    assert body["detail"] == "Validation failed"
    assert "termsAgreed" in [error["field"] for error in body["errors"]]
    assert client.get("/api/admin/clients", headers=admin_headers).json() == []


def test_onboarding_reports_every_bad_field(client):
    resp = client.post(
        "/api/client-onboarding",
        json={**JANE_SUBMISSION, "email": "not-an-email", "fullName": "J"},
    )

    assert resp.status_code == 400
    fields = {error["field"] for error in resp.json()["errors"]}
    assert {"email", "fullName"} <= fields


def test_contact_submission(client, admin_headers):
    resp = client.post(
        "/api/contact",
        json={"name": "Sam", "email": "sam@x.com", "subject": "Quote", "message": "Do you build online shops?"},
    )

    assert resp.status_code == 201
    assert resp.json()["data"]["id"]

    contacts = client.get("/api/admin/contacts", headers=admin_headers).json()
    assert [c["subject"] for c in contacts] == ["Quote"]


def test_contact_submission_validation(client):
    resp = client.post("/api/contact", json={"name": "Sam", "email": "sam@x.com", "subject": "Hi", "message": "short"})

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "message"


def test_health(client):
    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
    assert resp.json()["email"] == "not configured"
