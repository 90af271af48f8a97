"""User sync, lookup and admin-only role management."""


def make_admin(store, email="admin@x.com"):
    store.users.update_one({"email": email}, {"$set": {"role": "admin"}})


def test_sync_creates_user_with_default_role(client):
    response = client.post(
        "/users/sync",
        json={"email": "alice@x.com", "displayName": "Alice", "photoURL": "https://img/alice.png"},
    )
    assert response.status_code == 200
    assert response.json() == {
        "ok": True,
        "user": {
            "email": "alice@x.com",
            "displayName": "Alice",
            "photoURL": "https://img/alice.png",
            "role": "user",
        },
    }


def test_sync_keeps_existing_values_when_new_ones_are_empty(client):
    client.post("/users/sync", json={"email": "alice@x.com", "displayName": "Alice"})
    response = client.post("/users/sync", json={"email": "alice@x.com", "displayName": "", "photoURL": None})
    assert response.json()["user"]["displayName"] == "Alice"

    response = client.post("/users/sync", json={"email": "alice@x.com", "displayName": "Alice B."})
    assert response.json()["user"]["displayName"] == "Alice B."


def test_sync_never_touches_role(client, store):
    client.post("/users/sync", json={"email": "admin@x.com"})
    make_admin(store)
    response = client.post("/users/sync", json={"email": "admin@x.com", "displayName": "Boss"})
    assert response.json()["user"]["role"] == "admin"


def test_sync_requires_email(client):
    response = client.post("/users/sync", json={"displayName": "Nobody"})
    assert response.status_code == 400


def test_sync_does_not_expose_internal_fields(client):
    user = client.post("/users/sync", json={"email": "alice@x.com"}).json()["user"]
    assert set(user) == {"email", "displayName", "photoURL", "role"}


def test_get_user(client):
    client.post("/users/sync", json={"email": "alice@x.com", "displayName": "Alice"})
    response = client.get("/users/alice@x.com")
    assert response.status_code == 200
    user = response.json()["user"]
    assert user["displayName"] == "Alice"
    assert user["role"] == "user"
    assert user["createdAt"]
    assert "updatedAt" not in user and "_id" not in user


def test_get_missing_user(client):
    response = client.get("/users/ghost@x.com")
    assert response.status_code == 404
    assert response.json() == {"ok": False, "message": "User not found."}


def test_admin_can_change_role(client, store):
    client.post("/users/sync", json={"email": "admin@x.com"})
    client.post("/users/sync", json={"email": "bob@x.com"})
    make_admin(store)

    response = client.patch("/users/bob@x.com/role", json={"role": "admin", "requestorEmail": "admin@x.com"})
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "admin"
    assert client.get("/users/bob@x.com").json()["user"]["role"] == "admin"


def test_non_admin_cannot_change_role(client):
    client.post("/users/sync", json={"email": "bob@x.com"})
    client.post("/users/sync", json={"email": "carol@x.com"})

    response = client.patch("/users/carol@x.com/role", json={"role": "admin", "requestorEmail": "bob@x.com"})
    assert response.status_code == 403

    response = client.patch("/users/carol@x.com/role", json={"role": "admin", "requestorEmail": "nobody@x.com"})
    assert response.status_code == 403


def test_role_must_be_known(client, store):
    client.post("/users/sync", json={"email": "admin@x.com"})
    make_admin(store)
    response = client.patch("/users/admin@x.com/role", json={"role": "owner", "requestorEmail": "admin@x.com"})
    assert response.status_code == 400


def test_role_change_for_missing_user(client, store):
    client.post("/users/sync", json={"email": "admin@x.com"})
    make_admin(store)
    response = client.patch("/users/ghost@x.com/role", json={"role": "user", "requestorEmail": "admin@x.com"})
    assert response.status_code == 404


def test_list_users_is_admin_only(client, store):
    client.post("/users/sync", json={"email": "admin@x.com"})
    client.post("/users/sync", json={"email": "bob@x.com", "displayName": "Bob"})

    assert client.get("/users").status_code == 400
    assert client.get("/users", params={"requestorEmail": "bob@x.com"}).status_code == 403

    make_admin(store)
    body = client.get("/users", params={"requestorEmail": "admin@x.com"}).json()
    assert body["ok"] is True
    assert body["count"] == 2
    assert {user["email"] for user in body["users"]} == {"admin@x.com", "bob@x.com"}
    assert all("createdAt" in user for user in body["users"])
