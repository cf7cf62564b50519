"""API tests for sign-up, login and the current user."""

import pytest

SIGNUP = {"email": "ada@example.com", "handle": "ada", "password": "correct-horse"}


@pytest.mark.asyncio
async def test_sign_up_returns_tokens_and_user(client):
    response = await client.post("/api/v1/users", json=SIGNUP)
    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["user_id"].startswith("usr_")


@pytest.mark.asyncio
async def test_sign_up_generates_handle_when_omitted(client):
    response = await client.post(
        "/api/v1/users", json={"email": "grace@example.com", "password": "correct-horse"}
    )
    assert response.status_code == 201
    assert response.json()["user"]["handle"].startswith("user")


@pytest.mark.asyncio
async def test_sign_up_duplicate_email(client):
    await client.post("/api/v1/users", json=SIGNUP)
    response = await client.post("/api/v1/users", json={**SIGNUP, "handle": "ada2"})
    assert response.status_code == 409
    assert response.json()["error"]["code"] == "CONFLICT"


@pytest.mark.asyncio
async def test_login_and_me(client):
    await client.post("/api/v1/users", json=SIGNUP)
    login = await client.post(
        "/api/v1/auth/login", json={"email": SIGNUP["email"], "password": SIGNUP["password"]}
    )
    assert login.status_code == 200
    token = login.json()["access_token"]

    me = await client.get("/api/v1/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["handle"] == "ada"
    assert me.json()["last_login"] is not None


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    await client.post("/api/v1/users", json=SIGNUP)
    response = await client.post(
        "/api/v1/auth/login", json={"email": SIGNUP["email"], "password": "wrong-password"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"


@pytest.mark.asyncio
async def test_me_requires_token(client):
    response = await client.get("/api/v1/me")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_token_is_not_an_access_token(client):
    body = (await client.post("/api/v1/users", json=SIGNUP)).json()
    response = await client.get(
        "/api/v1/me", headers={"Authorization": f"Bearer {body['refresh_token']}"}
    )
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Not an access token"


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(client):
    response = await client.get("/api/v1/projects", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401
    assert "trace_id" in response.json()["error"]
