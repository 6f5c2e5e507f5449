from fakes import auth_header


def test_register_creates_profile(client, db):
    response = client.post(
        "/auth/register", json={"email": "dana@example.com", "password": "Str0ng!pass"}
    )

    assert response.status_code == 201
    body = response.json()
    assert body["email"] == "dana@example.com"
    assert {"id": body["id"], "email": "dana@example.com"}.items() <= db.rows(
        "profiles"
    )[0].items()


def test_register_rejects_weak_password(client):
    response = client.post(
        "/auth/register", json={"email": "dana@example.com", "password": "weak"}
    )

    assert response.status_code == 422


def test_register_duplicate_email(client, alice):
    response = client.post(
        "/auth/register", json={"email": alice.email, "password": "Str0ng!pass"}
    )

    assert response.status_code == 409


def test_login_sets_refresh_cookie_and_refresh_works(client, alice):
    response = client.post(
        "/auth/login", json={"email": alice.email, "password": "Passw0rd!"}
    )

    assert response.status_code == 200
    assert response.json()["user_id"] == alice.id
    refresh_token = response.cookies.get("refresh_token")
    assert refresh_token

    # the client keeps the cookie for /auth/access
    refreshed = client.get("/auth/access")
    assert refreshed.status_code == 200
    assert refreshed.json()["access_token"]


def test_login_bad_password(client, alice):
    response = client.post(
        "/auth/login", json={"email": alice.email, "password": "nope"}
    )

    assert response.status_code == 401


def test_refresh_without_cookie(client):
    assert client.get("/auth/access").status_code == 401


def test_me(client, friends, secrets, alice, bob, carol):
    friends.accept_request(friends.send_request(alice.id, bob.email).id)
    friends.send_request(carol.id, alice.email)
    secrets.save_secret(alice.id, "hi")

    response = client.get("/auth/me", headers=auth_header(alice))

    assert response.status_code == 200
    body = response.json()
    assert body["auth"] == {"id": alice.id, "email": alice.email}
    assert body["has_secret"] is True
    assert body["friends"] == ["bob@example.com"]
    assert [r["email"] for r in body["incoming_requests"]] == ["carol@example.com"]
    assert body["outgoing_requests"] == []


def test_logout_clears_cookie(client):
    response = client.post("/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"logged_out": True}
    assert "refresh_token" in response.headers.get("set-cookie", "")


def test_register_rolls_back_auth_user_when_profile_insert_fails(client, db):
    db.fail_tables.add("profiles")
    payload = {"email": "dana@example.com", "password": "Str0ng!pass"}

    failed = client.post("/auth/register", json=payload)

    assert failed.status_code == 500
    assert db.auth.users == {}

    db.fail_tables.clear()
    retried = client.post("/auth/register", json=payload)

    assert retried.status_code == 201
    assert db.rows("profiles")[0]["email"] == "dana@example.com"
