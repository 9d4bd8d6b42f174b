def test_signup_signin_flow(client):
    resp = client.post("/api/signup", json={"email": "a@x.com", "name": "Ann"})
    assert resp.json() == {"ok": True, "user": {"email": "a@x.com", "name": "Ann"}}

    dup = client.post("/api/signup", json={"email": "a@x.com", "name": "Ann2"})
    assert dup.status_code == 200
    assert dup.json() == {"ok": False, "error": "An account with that email already exists."}

    assert client.post("/api/signin", json={"email": "a@x.com"}).json()["ok"] is True

    missing = client.post("/api/signin", json={"email": "nope@x.com"})
    assert missing.status_code == 200
    assert missing.json()["ok"] is False
    assert missing.json()["error"].startswith("No account found")


def test_signup_missing_fields(client):
    resp = client.post("/api/signup", json={"email": "a@x.com"})
    assert resp.status_code == 200
    assert resp.json() == {"ok": False, "error": "Email and name are required."}


def test_me_uses_cookie(client):
    client.post("/api/signup", json={"email": "a@x.com", "name": "Ann"})

    assert client.get("/api/me").status_code == 404

    client.cookies.set("retroUser", "a%40x.com")
    resp = client.get("/api/me")
    assert resp.status_code == 200
    assert resp.json() == {"user": {"email": "a@x.com", "name": "Ann"}}


def test_board_lifecycle(client):
    board = client.post("/api/boards", json={"name": "Sprint"}).json()["board"]
    assert board["columns"] == {"went-well": [], "to-improve": [], "action-items": []}

    renamed = client.patch(f"/api/boards/{board['id']}", json={"name": " Sprint 2 "})
    assert renamed.json()["board"]["name"] == "Sprint 2"

    assert client.patch("/api/boards/missing", json={"name": "x"}).status_code == 404

    assert client.put(f"/api/boards/{board['id']}", json={"columns": {"went-well": ["hi"]}}).json() == {"ok": True}
    view = client.get(f"/api/boards/{board['id']}").json()
    assert view["board"]["columns"]["went-well"][0]["text"] == "hi"
    assert view["authors"] == {}
    assert view["myTotalVotes"] == 0

    assert client.delete(f"/api/boards/{board['id']}").json() == {"ok": True}
    assert client.get(f"/api/boards/{board['id']}").status_code == 404
    assert client.get("/api/boards").json() == {"boards": []}


def test_create_board_requires_name(client):
    resp = client.post("/api/boards", json={})
    assert resp.status_code == 200
    assert resp.json() == {"ok": False, "error": "Name is required."}


def test_reorder(client):
    ids = [client.post("/api/boards", json={"name": n}).json()["board"]["id"] for n in "ABC"]

    assert client.put("/api/boards/order", json={"ids": [ids[0], ids[2]]}).json() == {"ok": True}
    assert [b["id"] for b in client.get("/api/boards").json()["boards"]] == [ids[0], ids[2]]

    bad = client.put("/api/boards/order", json={"ids": "nope"})
    assert bad.json() == {"ok": False, "error": "ids required."}


def test_vote_route(client, board):
    url = f"/api/boards/{board['id']}/vote"

    assert client.post(url, json={"cardId": "w1"}).status_code == 401

    client.cookies.set("retroUser", "u@x.com")
    resp = client.post(url, json={"cardId": "w1"})
    assert resp.json() == {"ok": True, "votes": {"u@x.com": 1}, "myTotalVotes": 1}

    assert client.get(f"/api/boards/{board['id']}").json()["myTotalVotes"] == 1

    action = client.post(url, json={"cardId": "a1"})
    assert action.status_code == 200
    assert action.json() == {"ok": False, "error": "Card not found."}

    assert client.post("/api/boards/missing/vote", json={"cardId": "w1"}).status_code == 404


def test_storage_failure_is_500(client, service, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    service.store.path = blocker / "data.json"

    resp = client.post("/api/boards", json={"name": "B"})
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Storage failure."}


def test_invalid_utf8_data_file_recovers(client, service):
    service.store.path.write_bytes(b"\xff\xfe")

    resp = client.get("/api/boards")
    assert resp.status_code == 200
    assert resp.json() == {"boards": []}


def test_strict_invalid_utf8_is_json_500(client, service):
    service.store.strict = True
    service.store.path.write_bytes(b"\xff\xfe")

    resp = client.get("/api/boards")
    assert resp.status_code == 500
    assert resp.json() == {"ok": False, "error": "Storage failure."}
