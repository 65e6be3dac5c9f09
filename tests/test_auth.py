from datetime import datetime, timedelta, timezone

import jwt

from conftest import register


async def test_register_returns_token_and_normalized_email(client):
    res = await client.post(
        "/api/auth/register",
        json={"name": "  Ada  ", "email": " Ada@Example.COM ", "password": "secret123"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Ada"
    assert body["email"] == "ada@example.com"
    assert body["role"] == "interviewee"
    assert body["token"]
    assert "password_hash" not in body


async def test_register_requires_all_fields(client):
    res = await client.post("/api/auth/register", json={"name": "Ada", "email": "ada@example.com"})
    assert res.status_code == 400
    assert res.json()["detail"] == "Please provide all fields"


async def test_register_rejects_short_password(client):
    res = await client.post(
        "/api/auth/register", json={"name": "Ada", "email": "ada@example.com", "password": "abc"}
    )
    assert res.status_code == 400


async def test_register_duplicate_email_is_case_insensitive(client):
    await register(client, email="ada@example.com")
    res = await client.post(
        "/api/auth/register", json={"name": "Other", "email": "ADA@example.com", "password": "secret123"}
    )
    assert res.status_code == 409
    assert res.json()["detail"] == "User already exists"


async def test_password_is_stored_hashed(client, redis):
    body, _ = await register(client)
    raw = await redis.get(f"user:{body['id']}")
    assert "secret123" not in raw
    assert "$2b$" in raw


async def test_login_success(client):
    registered, _ = await register(client)
    res = await client.post("/api/auth/login", json={"email": "ADA@example.com", "password": "secret123"})
    assert res.status_code == 200
    body = res.json()
    assert body["id"] == registered["id"]
    assert body["token"]


async def test_login_wrong_password_and_unknown_email_look_the_same(client):
    await register(client)
    wrong = await client.post("/api/auth/login", json={"email": "ada@example.com", "password": "nope123"})
    unknown = await client.post("/api/auth/login", json={"email": "bob@example.com", "password": "secret123"})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json() == {"detail": "Invalid credentials"}


async def test_login_requires_email_and_password(client):
    res = await client.post("/api/auth/login", json={"email": "ada@example.com"})
    assert res.status_code == 400


async def test_me_requires_token(client):
    res = await client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["detail"] == "Not authorized, no token"


async def test_me_rejects_garbage_token(client):
    res = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["detail"] == "Not authorized, token failed"


async def test_me_rejects_expired_token(client):
    body, _ = await register(client)
    past = datetime.now(timezone.utc) - timedelta(days=1)
    token = jwt.encode({"sub": body["id"], "exp": past}, "test-secret", algorithm="HS256")
    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


async def test_me_rejects_token_for_missing_user(client):
    token = jwt.encode(
        {"sub": "ghost", "exp": datetime.now(timezone.utc) + timedelta(days=1)},
        "test-secret",
        algorithm="HS256",
    )
    res = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


async def test_me_returns_profile_without_password(client, auth_headers):
    res = await client.get("/api/auth/me", headers=auth_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["email"] == "ada@example.com"
    assert body["sessions"] == []
    assert "password_hash" not in body
