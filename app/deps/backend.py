from typing import Annotated, Any, AsyncGenerator

import httpx
from fastapi import Body, Depends

from app.factories import backend_config_factory, rate_fallback_factory
from app.packages.backend_proxy import BackendConfig, BackendProxy
from app.packages.rate_fallback import RateFallbackGenerator


def get_backend_config() -> BackendConfig:
    return backend_config_factory()


async def get_backend_client() -> AsyncGenerator[httpx.AsyncClient, None]:
    # Closed when the request finishes or is cancelled
    async with httpx.AsyncClient(follow_redirects=False) as client:
        yield client


async def get_backend_proxy(
    config: Annotated[BackendConfig, Depends(get_backend_config)],
    client: Annotated[httpx.AsyncClient, Depends(get_backend_client)],
) -> BackendProxy:
    return BackendProxy(config=config, client=client)


def get_rate_fallback() -> RateFallbackGenerator:
    return rate_fallback_factory()


BackendConfigDep = Annotated[BackendConfig, Depends(get_backend_config)]
BackendProxyDep = Annotated[BackendProxy, Depends(get_backend_proxy)]
RateFallbackDep = Annotated[RateFallbackGenerator, Depends(get_rate_fallback)]

# Any JSON document; forwarded to the backend as parsed
JsonBody = Annotated[Any, Body()]
