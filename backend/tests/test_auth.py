from conftest import login_headers


async def test_register_returns_user(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "Alice@Example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Alice"
    assert body["email"] == "alice@example.com"
    assert "password_hash" not in body


async def test_register_duplicate_email(client):
    payload = {"name": "Alice", "email": "alice@example.com", "password": "secret123"}
    assert (await client.post("/api/auth/register", json=payload)).status_code == 201

    response = await client.post("/api/auth/register", json={**payload, "name": "Other"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Email already in use"


async def test_register_validation_messages(client):
    response = await client.post(
        "/api/auth/register",
        json={"name": "A", "email": "alice@example.com", "password": "secret123"},
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Name must be at least 2 characters"

    response = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "not-an-email", "password": "secret123"},
    )
    assert response.json()["detail"] == "Invalid email address"

    response = await client.post(
        "/api/auth/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "123"},
    )
    assert response.json()["detail"] == "Password must be at least 6 characters"


async def test_login_wrong_password(client):
    await login_headers(client, "alice@example.com")

    response = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


async def test_login_unknown_email_same_error(client):
    response = await client.post(
        "/api/auth/login", json={"email": "nobody@example.com", "password": "secret123"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


async def test_me_and_refresh(client):
    await login_headers(client, "alice@example.com", name="Alice")
    tokens = (await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "secret123"}
    )).json()

    response = await client.get(
        "/api/users/me", headers={"Authorization": f"Bearer {tokens['access_token']}"}
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Alice"

    response = await client.post("/api/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert response.status_code == 200
    assert response.json()["access_token"]

    # 访问令牌不能用来刷新
    response = await client.post("/api/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert response.status_code == 401


async def test_me_requires_session(client):
    response = await client.get("/api/users/me")
    assert response.status_code == 401

    response = await client.get("/api/users/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


async def test_update_profile_and_password(client, alice):
    response = await client.patch("/api/users/me", json={"name": "Alice Liddell"}, headers=alice)
    assert response.status_code == 200
    assert response.json()["name"] == "Alice Liddell"

    response = await client.patch(
        "/api/users/me/password",
        json={"old_password": "nope-nope", "new_password": "newsecret"},
        headers=alice,
    )
    assert response.status_code == 400

    response = await client.patch(
        "/api/users/me/password",
        json={"old_password": "secret123", "new_password": "newsecret"},
        headers=alice,
    )
    assert response.status_code == 200

    response = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "newsecret"}
    )
    assert response.status_code == 200
