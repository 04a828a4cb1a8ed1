"""End-to-end scenarios over both façades sharing one core."""

from datetime import datetime

from keepnotes.core.coordinator import ConsistencyCoordinator
from keepnotes.dependencies import get_core


def _bearer(token):
    return {"Authorization": f"Bearer {token}"}


def test_tag_cascade_scenario(client):
    """alice tags a note, deletes the tag, and the note survives untagged."""
    token = client.post("/api/auth/register", json={"username": "alice", "password": "pw1"}).json()["token"]

    tag = client.post("/api/tags/", json={"name": "work"}, headers=_bearer(token)).json()
    note = client.post("/api/notes/", json={"title": "plan", "tagIds": [tag["id"]]}, headers=_bearer(token)).json()

    assert client.delete(f"/api/tags/{tag['id']}", headers=_bearer(token)).status_code == 200

    after = client.get(f"/api/notes/{note['id']}", headers=_bearer(token)).json()
    assert after["tagIds"] == []
    assert after["archived"] is False


def test_revoked_token_scenario(client):
    token = client.post("/api/auth/register", json={"username": "alice", "password": "pw1"}).json()["token"]
    assert client.post("/api/auth/logout", headers=_bearer(token)).status_code == 200

    rpc = client.post("/rpc/keepapi.NoteService/GetNotes", json={}, headers=_bearer(token)).json()
    assert rpc["success"] is False
    assert rpc["message"] == "Token has been revoked"


def test_title_only_update_scenario(client):
    token = client.post("/api/auth/register", json={"username": "alice", "password": "pw1"}).json()["token"]
    note = client.post("/api/notes/", json={"title": "a", "content": "keep me"}, headers=_bearer(token)).json()

    updated = client.put(f"/api/notes/{note['id']}", json={"title": "b"}, headers=_bearer(token)).json()

    assert updated["content"] == "keep me"
    assert datetime.fromisoformat(updated["updatedAt"]) > datetime.fromisoformat(updated["createdAt"])


def test_facades_share_state(client):
    session = client.post(
        "/rpc/keepapi.AuthService/Register", json={"username": "alice", "password": "pw1"}
    ).json()
    created = client.post(
        "/rpc/keepapi.NoteService/CreateNote", json={"title": "via rpc"}, headers=_bearer(session["token"])
    ).json()

    rest = client.get(f"/api/notes/{created['note']['id']}", headers=_bearer(session["token"]))
    assert rest.status_code == 200
    assert rest.json()["title"] == "via rpc"


def test_restart_keeps_everything(client, test_settings):
    token = client.post("/api/auth/register", json={"username": "alice", "password": "pw1"}).json()["token"]
    client.post("/api/notes/", json={"title": "durable"}, headers=_bearer(token))
    client.post("/api/auth/logout", headers=_bearer(token))

    restarted = ConsistencyCoordinator.open(test_settings)
    client.app.dependency_overrides[get_core] = lambda: restarted

    login = client.post("/api/auth/login", json={"username": "alice", "password": "pw1"}).json()
    notes = client.get("/api/notes/", headers=_bearer(login["token"])).json()
    assert [n["title"] for n in notes] == ["durable"]
    # the revocation survived the restart too
    assert client.get("/api/notes/", headers=_bearer(token)).json()["error"] == "TokenRevoked"
