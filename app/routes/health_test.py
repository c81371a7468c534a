import httpx
from httpx import AsyncClient

from app.tests.fixtures_clients import BACKEND_URL, BackendStub


async def test_health_backend_connected(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, content=b"OK")

    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["frontend"] == "running"
    assert body["backend"] == "connected"
    assert body["backendMessage"] == "OK"
    assert body["backendUrl"] == BACKEND_URL
    assert "timestamp" in body
    assert str(backend.last_request.url) == f"{BACKEND_URL}/api/rate/health"


async def test_health_backend_error_status(client: AsyncClient, backend: BackendStub):
    backend.respond_with(503, content=b"Service Unavailable")

    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["backend"] == "disconnected"
    assert body["backendMessage"] == "HTTP 503: Service Unavailable"


async def test_health_backend_unreachable(client: AsyncClient, backend: BackendStub):
    backend.fail_with(httpx.ConnectError("Connection refused"))

    response = await client.get("/api/health")

    assert response.status_code == 200
    body = response.json()
    assert body["backend"] == "disconnected"
    assert body["error"] == "Connection refused"
    assert "backendMessage" not in body


async def test_preflight_answered_locally(client: AsyncClient, backend: BackendStub):
    response = await client.options("/api/admin/products/42")

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert "PATCH" in response.headers["Access-Control-Allow-Methods"]
    assert response.headers["Access-Control-Allow-Headers"] == "*"
    assert backend.calls == 0
