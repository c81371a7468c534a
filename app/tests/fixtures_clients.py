import random
from datetime import datetime, timezone
from typing import Any, Callable, Optional

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.deps.backend import get_backend_client, get_backend_config, get_rate_fallback
from app.main import app
from app.packages.backend_proxy import BackendConfig
from app.packages.rate_fallback import RateFallbackGenerator

BACKEND_URL = "http://backend.test"
AUTH_HEADER = {"Authorization": "Bearer test-token-123"}
FIXED_NOW = datetime(2026, 3, 15, 9, 30, tzinfo=timezone.utc)


class BackendStub:
    """Stands in for the upstream REST backend.

    Every outbound request is recorded so tests can assert on call counts,
    target URLs and forwarded headers.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._handler: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json={})
        )

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def respond_with(
        self,
        status_code: int = 200,
        json: Any = None,
        content: Optional[bytes] = None,
        headers: Optional[dict[str, str]] = None,
    ):
        def handler(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content, headers=headers)
            if json is not None:
                return httpx.Response(status_code, json=json, headers=headers)
            return httpx.Response(status_code, headers=headers)

        self._handler = handler

    def fail_with(self, error: Exception):
        def handler(request: httpx.Request) -> httpx.Response:
            raise error

        self._handler = handler

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture(scope="function")
def backend() -> BackendStub:
    return BackendStub()


@pytest.fixture(scope="function")
def backend_config() -> BackendConfig:
    # Trailing slash on purpose: normalization happens inside BackendConfig
    return BackendConfig(base_url=f"{BACKEND_URL}/", timeout=5.0)


@pytest.fixture(scope="function")
def fallback_generator() -> RateFallbackGenerator:
    return RateFallbackGenerator(rng=random.Random(1234), now=lambda: FIXED_NOW)


@pytest.fixture(scope="function")
async def client(
    backend: BackendStub,
    backend_config: BackendConfig,
    fallback_generator: RateFallbackGenerator,
):
    """
    Provide a test client whose backend calls go to the ``backend`` stub.
    """

    async def override_get_backend_client():
        async with httpx.AsyncClient(transport=backend.transport()) as backend_client:
            yield backend_client

    app.dependency_overrides[get_backend_client] = override_get_backend_client
    app.dependency_overrides[get_backend_config] = lambda: backend_config
    app.dependency_overrides[get_rate_fallback] = lambda: fallback_generator

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://localhost"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()
