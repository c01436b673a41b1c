from fastapi.testclient import TestClient

from barangay.db import DocumentStore
from barangay.main import create_app
from tests.conftest import register


def test_pending_list_hides_secrets(client):
    register(client, "alice")
    register(client, "boss", role="privileged")

    resp = client.get("/admin/pending-privileged-accounts")
    assert resp.status_code == 200
    assert resp.json() == [{"identity": "boss", "role": "privileged", "approvalStatus": "pending"}]


def test_approve_then_login(client):
    register(client, "boss", role="privileged")

    resp = client.put("/admin/decide-approval/boss", json={"decision": "approved"})
    assert resp.status_code == 200
    assert resp.json()["message"] == "Privileged account approved successfully"

    assert client.get("/admin/pending-privileged-accounts").json() == []
    assert client.post("/auth/login", json={"identity": "boss", "secret": "pw123"}).status_code == 200


def test_reject_cannot_be_overturned(client):
    register(client, "boss", role="privileged")

    resp = client.put("/admin/decide-approval/boss", json={"decision": "rejected"})
    assert resp.json()["message"] == "Privileged account rejected successfully"

    resp = client.put("/admin/decide-approval/boss", json={"decision": "approved"})
    assert resp.status_code == 409
    assert client.post("/auth/login", json={"identity": "boss", "secret": "pw123"}).status_code == 403


def test_decision_errors(client):
    register(client, "boss", role="privileged")
    assert client.put("/admin/decide-approval/ghost", json={"decision": "approved"}).status_code == 404
    assert client.put("/admin/decide-approval/boss", json={"decision": "maybe"}).status_code == 400
    assert client.put("/admin/decide-approval/boss", json={}).status_code == 400


def test_admin_routes_require_privileged_token_when_enabled(config):
    config.ADMIN_AUTH_REQUIRED = True
    config.SEED_DEFAULT_ADMIN = True
    with TestClient(create_app(config, DocumentStore())) as client:
        register(client, "alice")
        register(client, "boss", role="privileged")

        # 1. No token
        assert client.get("/admin/pending-privileged-accounts").status_code == 401

        # 2. Standard account token
        user_token = client.post("/auth/login", json={"identity": "alice", "secret": "pw123"}).json()["accessToken"]
        resp = client.get("/admin/pending-privileged-accounts", headers={"Authorization": f"Bearer {user_token}"})
        assert resp.status_code == 403

        # 3. Garbage token
        resp = client.get("/admin/pending-privileged-accounts", headers={"Authorization": "Bearer nonsense"})
        assert resp.status_code == 403

        # 4. Approved admin token
        admin_token = client.post("/auth/login", json={"identity": "admin", "secret": "admin"}).json()["accessToken"]
        headers = {"Authorization": f"Bearer {admin_token}"}
        resp = client.get("/admin/pending-privileged-accounts", headers=headers)
        assert resp.status_code == 200
        assert [a["identity"] for a in resp.json()] == ["boss"]

        resp = client.put("/admin/decide-approval/boss", json={"decision": "approved"}, headers=headers)
        assert resp.status_code == 200
