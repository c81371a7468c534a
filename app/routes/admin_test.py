import json

import pytest
from httpx import AsyncClient

from app.packages.backend_proxy import BackendConfig
from app.tests.fixtures_clients import AUTH_HEADER, BACKEND_URL, BackendStub

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + bytes(range(256))


@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/api/admin/assets"),
        ("POST", "/api/admin/rates/update"),
        ("GET", "/api/admin/products"),
        ("POST", "/api/admin/products"),
        ("PUT", "/api/admin/products/42"),
        ("DELETE", "/api/admin/products/42"),
        ("PATCH", "/api/admin/products/42/status"),
    ],
)
async def test_admin_routes_require_authorization(
    client: AsyncClient, backend: BackendStub, method: str, path: str
):
    response = await client.request(method, path, json={})

    assert response.status_code == 401
    assert response.json() == {"message": "Authorization header required"}
    assert backend.calls == 0


async def test_create_product_multipart_passthrough(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(201, json={"id": 42, "name": "Gold Ring"})

    response = await client.post(
        "/api/admin/products",
        data={"name": "Gold Ring", "price": "45000", "category": "rings"},
        files={"image": ("ring.png", PNG_BYTES, "image/png")},
        headers=AUTH_HEADER,
    )

    assert response.status_code == 201
    assert response.json() == {"id": 42, "name": "Gold Ring"}

    request = backend.last_request
    assert str(request.url) == f"{BACKEND_URL}/api/admin/products"
    assert request.headers["Authorization"] == "Bearer test-token-123"
    content_type = request.headers["Content-Type"]
    assert content_type.startswith("multipart/form-data; boundary=")
    boundary = content_type.split("boundary=", 1)[1]
    assert f"--{boundary}".encode() in request.content
    assert PNG_BYTES in request.content
    assert b'name="price"' in request.content


async def test_create_product_json(client: AsyncClient, backend: BackendStub):
    backend.respond_with(201, json={"id": 43})
    product = {"name": "Silver Chain", "price": 1200, "isActive": True}

    response = await client.post(
        "/api/admin/products", json=product, headers=AUTH_HEADER
    )

    assert response.status_code == 201
    request = backend.last_request
    assert request.headers["Content-Type"] == "application/json"
    assert json.loads(request.content) == product


async def test_create_product_backend_validation_error(
    client: AsyncClient, backend: BackendStub
):
    backend.respond_with(422, json={"message": "Price must be positive"})

    response = await client.post(
        "/api/admin/products", json={"price": -1}, headers=AUTH_HEADER
    )

    assert response.status_code == 422
    assert response.json() == {"message": "Price must be positive"}


async def test_update_product_multipart(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"id": 42})

    response = await client.put(
        "/api/admin/products/42",
        data={"name": "Gold Ring v2"},
        files={"image": ("ring.png", PNG_BYTES, "image/png")},
        headers=AUTH_HEADER,
    )

    assert response.status_code == 200
    request = backend.last_request
    assert request.method == "PUT"
    assert str(request.url) == f"{BACKEND_URL}/api/admin/products/42"
    assert PNG_BYTES in request.content


@pytest.mark.parametrize("method", ["PUT", "DELETE"])
async def test_product_id_missing(
    client: AsyncClient, backend: BackendStub, method: str
):
    response = await client.request(method, "/api/admin/products", headers=AUTH_HEADER)

    assert response.status_code == 400
    assert response.json() == {"message": "Product ID is required"}
    assert backend.calls == 0


async def test_blank_product_id(client: AsyncClient, backend: BackendStub):
    response = await client.delete("/api/admin/products/%20", headers=AUTH_HEADER)

    assert response.status_code == 400
    assert response.json() == {"message": "Product ID is required"}
    assert backend.calls == 0


async def test_delete_product(client: AsyncClient, backend: BackendStub):
    backend.respond_with(204)

    response = await client.delete("/api/admin/products/42", headers=AUTH_HEADER)

    assert response.status_code == 204
    assert backend.last_request.method == "DELETE"
    assert str(backend.last_request.url) == f"{BACKEND_URL}/api/admin/products/42"


async def test_delete_missing_product(client: AsyncClient, backend: BackendStub):
    backend.respond_with(404, json={"message": "Product not found"})

    response = await client.delete("/api/admin/products/999", headers=AUTH_HEADER)

    assert response.status_code == 404
    assert response.json() == {"message": "Product not found"}


async def test_update_product_status(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"id": 42, "isActive": False})

    response = await client.patch(
        "/api/admin/products/42/status",
        json={"isActive": False},
        headers=AUTH_HEADER,
    )

    assert response.status_code == 200
    request = backend.last_request
    assert request.method == "PATCH"
    assert str(request.url) == f"{BACKEND_URL}/api/admin/products/42/status"
    assert json.loads(request.content) == {"isActive": False}


async def test_list_products_forwards_query(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json=[{"id": 42}])

    response = await client.get(
        "/api/admin/products",
        params={"page": 2, "category": "rings"},
        headers=AUTH_HEADER,
    )

    assert response.status_code == 200
    assert response.json() == [{"id": 42}]
    params = backend.last_request.url.params
    assert params["page"] == "2"
    assert params["category"] == "rings"


async def test_update_rates(client: AsyncClient, backend: BackendStub):
    backend.respond_with(200, json={"updated": True})

    response = await client.post(
        "/api/admin/rates/update", json={"gold22k": 5900}, headers=AUTH_HEADER
    )

    assert response.status_code == 200
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert json.loads(backend.last_request.content) == {"gold22k": 5900}


@pytest.mark.parametrize(
    "base_url",
    ["http://backend.test", "http://backend.test/", "http://backend.test//"],
)
async def test_backend_url_has_single_slash(
    client: AsyncClient,
    backend: BackendStub,
    backend_config: BackendConfig,
    base_url: str,
):
    backend_config.base_url = BackendConfig(base_url=base_url).base_url
    backend.respond_with(200, json=[])

    await client.get("/api/admin/assets", headers=AUTH_HEADER)

    assert str(backend.last_request.url) == f"{BACKEND_URL}/api/admin/assets"
