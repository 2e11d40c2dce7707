import pytest


def test_admin_routes_require_authentication(client):
    for path in ("/api/admin/clients", "/api/admin/projects", "/api/admin/contacts"):
        assert client.get(path).status_code == 401


def test_clients_are_listed_newest_first(client, admin_headers, submit_onboarding):
    first = submit_onboarding(fullName="First Client", email="first@x.com")
    second = submit_onboarding(fullName="Second Client", email="second@x.com")

    resp = client.get("/api/admin/clients", headers=admin_headers)

    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()] == [second["client"]["id"], first["client"]["id"]]


def test_client_detail_includes_projects(client, admin_headers, submit_onboarding):
    data = submit_onboarding()

    resp = client.get(f"/api/admin/clients/{data['client']['id']}", headers=admin_headers)

    assert resp.status_code == 200
    assert resp.json()["client"]["fullName"] == "Jane Doe"
    assert [p["id"] for p in resp.json()["projects"]] == [data["project"]["id"]]


def test_missing_client_is_404(client, admin_headers):
    resp = client.get("/api/admin/clients/999", headers=admin_headers)

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Client not found"


def test_admin_sees_all_projects(client, admin_headers, submit_onboarding):
    submit_onboarding()
    submit_onboarding(email="other@x.com")

    assert len(client.get("/api/admin/projects", headers=admin_headers).json()) == 2


@pytest.mark.parametrize("new_status", ["in-progress", "completed", "on-hold", "cancelled", "pending"])
def test_update_project_status(client, admin_headers, submit_onboarding, new_status):
    project_id = submit_onboarding()["project"]["id"]

    resp = client.patch(
        f"/api/admin/projects/{project_id}/status", json={"status": new_status}, headers=admin_headers
    )

    assert resp.status_code == 200
    assert resp.json()["data"]["status"] == new_status
    assert client.get(f"/api/projects/{project_id}", headers=admin_headers).json()["status"] == new_status


def test_unknown_status_is_rejected(client, admin_headers, submit_onboarding):
    project_id = submit_onboarding()["project"]["id"]

    resp = client.patch(
        f"/api/admin/projects/{project_id}/status", json={"status": "done"}, headers=admin_headers
    )

    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "status"
    assert client.get(f"/api/projects/{project_id}", headers=admin_headers).json()["status"] == "pending"


def test_status_of_missing_project_is_404(client, admin_headers):
    resp = client.patch("/api/admin/projects/999/status", json={"status": "completed"}, headers=admin_headers)

    assert resp.status_code == 404


def test_client_cannot_change_status(client, make_client_user):
    jane = make_client_user("jane")

    resp = client.patch(
        f"/api/admin/projects/{jane.project_id}/status", json={"status": "completed"}, headers=jane.headers
    )

    assert resp.status_code == 403
