import json

import httpx
from httpx import AsyncClient

from app.tests.fixtures_clients import AUTH_HEADER, BACKEND_URL, BackendStub


async def test_signin_forwards_body(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"token": "jwt-token", "user": {"id": 1}})
    credentials = {"email": "asha@example.com", "password": "secret"}

    response = await client.post("/api/auth/signin", json=credentials)

    assert response.status_code == 200
    assert response.json() == {"token": "jwt-token", "user": {"id": 1}}
    request = backend.last_request
    assert request.method == "POST"
    assert str(request.url) == f"{BACKEND_URL}/api/auth/signin"
    assert json.loads(request.content) == credentials
    assert "Authorization" not in request.headers


async def test_signin_propagates_backend_error(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(401, json={"message": "Invalid email or password"})

    response = await client.post(
        "/api/auth/signin", json={"email": "asha@example.com", "password": "wrong"}
    )

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password"}


async def test_signup_backend_unreachable(client: AsyncClient, backend: BackendStub):
    backend.fail_with(httpx.ConnectError("Connection refused"))

    response = await client.post("/api/auth/signup", json={"email": "a@b.c"})

    assert response.status_code == 500
    assert response.json() == {
        "message": "Sign up failed",
        "error": "Connection refused",
    }


async def test_forgot_password_has_no_cors_headers(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(200, json={"message": "Reset email sent"})

    response = await client.post(
        "/api/auth/forgot-password", json={"email": "asha@example.com"}
    )

    assert response.status_code == 200
    assert "Access-Control-Allow-Origin" not in response.headers


async def test_reset_password_relays(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"message": "Password updated"})

    response = await client.post(
        "/api/auth/reset-password", json={"token": "abc", "password": "new-secret"}
    )

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert str(backend.last_request.url) == f"{BACKEND_URL}/api/auth/reset-password"


async def test_invalid_json_body(client: AsyncClient, backend: BackendStub):
    response = await client.post(
        "/api/auth/signin",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert backend.calls == 0


async def test_verify_reset_token_valid(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"valid": True})

    response = await client.get("/api/auth/verify-reset-token/abc123")

    assert response.status_code == 200
    assert response.json() == {"valid": True}
    assert str(backend.last_request.url) == (
        f"{BACKEND_URL}/api/auth/verify-reset-token/abc123"
    )


async def test_verify_reset_token_error_marks_invalid(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(400, json={"message": "Token expired"})

    response = await client.get("/api/auth/verify-reset-token/expired")

    assert response.status_code == 400
    assert response.json() == {"valid": False, "message": "Token expired"}


async def test_profile_requires_authorization(
    client: AsyncClient, backend: BackendStub
):
    response = await client.get("/api/auth/profile")

    assert response.status_code == 401
    assert response.json() == {"message": "Authorization header required"}
    assert backend.calls == 0


async def test_profile_rejects_blank_authorization(
    client: AsyncClient, backend: BackendStub
):
    response = await client.put(
        "/api/auth/profile", json={"name": "Asha"}, headers={"Authorization": "  "}
    )

    assert response.status_code == 401
    assert backend.calls == 0


async def test_profile_forwards_authorization_verbatim(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(200, json={"id": 1, "name": "Asha"})

    response = await client.get("/api/auth/profile", headers=AUTH_HEADER)

    assert response.status_code == 200
    assert response.json() == {"id": 1, "name": "Asha"}
    assert backend.last_request.headers["Authorization"] == "Bearer test-token-123"


async def test_update_profile(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"id": 1, "name": "Asha R"})

    response = await client.put(
        "/api/auth/profile", json={"name": "Asha R"}, headers=AUTH_HEADER
    )

    assert response.status_code == 200
    request = backend.last_request
    assert request.method == "PUT"
    assert json.loads(request.content) == {"name": "Asha R"}
