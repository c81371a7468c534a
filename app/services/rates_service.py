"""Market data endpoints with a degrade-never-fail policy.

Rate reads go to the backend first. Any transport failure, timeout, malformed
body or non-2xx status is absorbed and answered with synthetic data of the
same shape, tagged with an ``X-Data-Source: mock-fallback`` header.
"""

from typing import Any, Callable, Mapping, Optional

import structlog
from fastapi import Response
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.packages.backend_proxy import (
    CORS_HEADERS,
    DATA_SOURCE_HEADER,
    ERROR_HEADER,
    BackendError,
    BackendProxy,
    GatewayError,
    TransportError,
    relay_response,
)

logger = structlog.stdlib.get_logger(__name__)

MOCK_FALLBACK = "mock-fallback"
MAX_ERROR_HEADER_LENGTH = 200


def header_safe(value: str) -> str:
    """Collapse a message into a single latin-1 header line."""
    single_line = " ".join(value.split())
    encoded = single_line.encode("latin-1", "replace").decode("latin-1")
    return encoded[:MAX_ERROR_HEADER_LENGTH] or "Unknown error"


def describe_failure(error: GatewayError) -> str:
    if isinstance(error, BackendError):
        return (
            f"Backend API responded with status: {error.status_code}"
            f" - {error.message}"
        )
    return error.error or error.message


def fallback_response(payload: BaseModel, reason: str) -> JSONResponse:
    return JSONResponse(
        content=payload.model_dump(by_alias=True),
        status_code=200,
        headers={
            **CORS_HEADERS,
            DATA_SOURCE_HEADER: MOCK_FALLBACK,
            ERROR_HEADER: header_safe(reason),
        },
    )


async def fetch_with_fallback(
    proxy: BackendProxy,
    path: str,
    synthesize: Callable[[], BaseModel],
    *,
    failure_message: str,
    params: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Relay a backend rate read, or synthesize one if the backend fails.

    Args:
        proxy: Request-scoped backend proxy
        path: Backend resource path (e.g., "/api/rate/today")
        synthesize: Builds a payload with the genuine response shape
        failure_message: Used in logs and the diagnostic header
        params: Query parameters forwarded to the backend

    Returns:
        The genuine backend response, or a 200 with synthetic data
    """
    try:
        response = await proxy.send(
            "GET", path, params=params, failure_message=failure_message
        )
        return relay_response(response, failure_message=failure_message, cors=True)
    except (TransportError, BackendError) as e:
        reason = describe_failure(e)
        logger.warning(
            "Serving synthetic rate data",
            path=path,
            reason=reason,
        )
        return fallback_response(synthesize(), reason)
