"""HTTP forwarding utilities for the upstream REST backend.

This module handles:
- Backend URL construction from the normalized base URL
- Authorization header forwarding (verbatim)
- JSON vs multipart body dispatch (multipart is streamed, never re-encoded)
- Translating backend responses into gateway responses or errors

No dependencies on app.* modules to maintain independence and reusability.
"""

from typing import Any, AsyncIterator, Mapping, Optional

import httpx
import structlog
from fastapi import Request, Response

from .errors import BackendError, ClientError, TransportError
from .types import CORS_HEADERS, BackendConfig, BodyKind, encode_path_segment

logger = structlog.stdlib.get_logger(__name__)

_NO_JSON = object()


async def stream_request_body(request: Request) -> AsyncIterator[bytes]:
    """Stream request body from client in chunks.

    Args:
        request: FastAPI request object

    Yields:
        Chunks of request body data
    """
    async for chunk in request.stream():
        yield chunk


def detect_body_kind(content_type: Optional[str]) -> BodyKind:
    if content_type and content_type.lower().startswith("multipart/form-data"):
        return BodyKind.MULTIPART
    return BodyKind.JSON


async def read_json_body(request: Request) -> Any:
    """Parse the inbound JSON body.

    Raises:
        ClientError: If the body is empty or not valid JSON
    """
    try:
        return await request.json()
    except ValueError:
        raise ClientError("Invalid JSON body")


def extract_error_message(response: httpx.Response, default: str) -> str:
    """Derive a human readable message from a backend error response.

    Prefers a ``message`` (or ``error``) field of a JSON body, then the raw
    body text, then ``default``.
    """
    try:
        payload = response.json()
    except ValueError:
        payload = None

    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value

    return response.text.strip() or default


def parse_json_response(response: httpx.Response, failure_message: str) -> Any:
    """Decode a successful backend response.

    Raises:
        TransportError: If the body is not valid JSON
    """
    try:
        return response.json()
    except ValueError as e:
        logger.error(
            "Malformed backend response",
            url=str(response.request.url),
            status_code=response.status_code,
            error=str(e),
        )
        raise TransportError(
            failure_message, error=f"Malformed backend response: {e}"
        ) from e


def relay_response(
    response: httpx.Response,
    *,
    failure_message: str,
    cors: bool = False,
    error_extra: Optional[dict[str, Any]] = None,
) -> Response:
    """Translate a backend response into the response sent to the caller.

    2xx bodies are relayed byte for byte with the backend status code.

    Raises:
        BackendError: For any non-2xx backend status
        TransportError: For a 2xx response whose body is not JSON
    """
    headers = dict(CORS_HEADERS) if cors else {}

    if not response.is_success:
        message = extract_error_message(response, failure_message)
        logger.warning(
            "Backend returned an error",
            url=str(response.request.url),
            status_code=response.status_code,
            backend_message=message,
        )
        raise BackendError(message, response.status_code, extra=error_extra)

    if not response.content:
        return Response(status_code=response.status_code, headers=headers)

    parse_json_response(response, failure_message)
    return Response(
        content=response.content,
        status_code=response.status_code,
        headers=headers,
        media_type="application/json",
    )


class BackendProxy:
    """Forwards gateway requests to the upstream REST backend.

    One instance is created per inbound request around a request-scoped
    ``httpx.AsyncClient``.
    """

    def __init__(self, config: BackendConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    async def send(
        self,
        method: str,
        path: str,
        *,
        authorization: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
        json_body: Any = _NO_JSON,
        content: Optional[AsyncIterator[bytes]] = None,
        content_type: Optional[str] = None,
        content_length: Optional[str] = None,
        failure_message: str = "Backend request failed",
        timeout: Optional[float] = None,
        accept: str = "application/json",
        stream: bool = False,
    ) -> httpx.Response:
        """Send a request to the backend and return the raw response.

        Args:
            method: HTTP method
            path: Backend resource path (e.g., "/api/rate/today")
            authorization: Inbound Authorization header, forwarded verbatim
            params: Query parameters
            json_body: JSON payload; sent with an application/json content type
            content: Raw body stream (multipart passthrough)
            content_type: Inbound Content-Type for raw bodies, boundary included
            content_length: Inbound Content-Length for raw bodies
            failure_message: Message used if the backend cannot be reached
            timeout: Overrides the configured timeout
            accept: Accept header value
            stream: Return before the body is read; the caller must close the
                response

        Returns:
            The backend response, whatever its status code

        Raises:
            TransportError: On network failure or timeout
        """
        target_url = self.config.url_for(path)
        timeout = timeout if timeout is not None else self.config.timeout

        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": accept,
        }
        if authorization:
            headers["Authorization"] = authorization

        request_kwargs: dict[str, Any] = {}
        if json_body is not _NO_JSON:
            headers["Content-Type"] = "application/json"
            request_kwargs["json"] = json_body
        elif content is not None:
            if content_type:
                headers["Content-Type"] = content_type
            if content_length:
                headers["Content-Length"] = content_length
            request_kwargs["content"] = content

        logger.info(
            "Forwarding request to backend",
            method=method,
            target_url=target_url,
            has_authorization=bool(authorization),
        )

        try:
            backend_request = self.client.build_request(
                method=method,
                url=target_url,
                headers=headers,
                params=dict(params) if params else None,
                timeout=timeout,
                **request_kwargs,
            )
            response = await self.client.send(backend_request, stream=stream)
        except httpx.TimeoutException as e:
            logger.error(
                "Timeout while forwarding request",
                target_url=target_url,
                timeout=timeout,
                error=str(e),
            )
            raise TransportError(
                failure_message,
                error=f"Backend request timed out after {timeout:g}s",
            ) from e
        except httpx.HTTPError as e:
            logger.error(
                "HTTP error while forwarding request",
                target_url=target_url,
                error=str(e),
            )
            raise TransportError(
                failure_message, error=str(e) or type(e).__name__
            ) from e

        logger.info(
            "Backend response received",
            status_code=response.status_code,
            target_url=target_url,
        )
        return response

    async def forward(
        self,
        method: str,
        path: str,
        *,
        failure_message: str,
        cors: bool = False,
        error_extra: Optional[dict[str, Any]] = None,
        **send_kwargs: Any,
    ) -> Response:
        """Send a request to the backend and relay its response."""
        response = await self.send(
            method, path, failure_message=failure_message, **send_kwargs
        )
        return relay_response(
            response,
            failure_message=failure_message,
            cors=cors,
            error_extra=error_extra,
        )

    async def forward_body(
        self,
        request: Request,
        method: str,
        path: str,
        *,
        authorization: Optional[str],
        failure_message: str,
        cors: bool = False,
    ) -> Response:
        """Forward a request whose body may be JSON or multipart form data.

        The body kind is decided once from the declared content type.
        Multipart bodies are streamed through untouched with their original
        Content-Type so the boundary parameter survives.
        """
        content_type = request.headers.get("content-type")

        if detect_body_kind(content_type) is BodyKind.MULTIPART:
            return await self.forward(
                method,
                path,
                authorization=authorization,
                content=stream_request_body(request),
                content_type=content_type,
                content_length=request.headers.get("content-length"),
                failure_message=failure_message,
                cors=cors,
            )

        return await self.forward(
            method,
            path,
            authorization=authorization,
            json_body=await read_json_body(request),
            failure_message=failure_message,
            cors=cors,
        )


def require_identifier(value: Optional[str], label: str) -> str:
    """Validate a path identifier and encode it for the backend path.

    Raises:
        ClientError: If the identifier is missing or blank
    """
    if value is None or not value.strip():
        raise ClientError(f"{label} is required")
    return encode_path_segment(value)
