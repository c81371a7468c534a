"""Product image resolution.

Images are resolved through an ordered chain:
1. Backend upload endpoint (streamed)
2. Local uploads directory
3. Placeholder redirect

Only an invalid filename (400) or a path escaping the uploads directory (403)
ends in an error response.
"""

from pathlib import Path
from typing import AsyncIterator, Optional
from urllib.parse import urljoin

import httpx
import structlog
from fastapi import Request, Response
from fastapi.responses import RedirectResponse, StreamingResponse
from starlette.concurrency import run_in_threadpool

from app.packages.backend_proxy import (
    DATA_SOURCE_HEADER,
    BackendProxy,
    ClientError,
    SecurityError,
    TransportError,
    encode_path_segment,
)

logger = structlog.stdlib.get_logger(__name__)

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".svg": "image/svg+xml",
}
DEFAULT_CONTENT_TYPE = "image/jpeg"
LOCAL_FALLBACK = "local-fallback"
STREAM_CHUNK_SIZE = 65536

_FORBIDDEN_FILENAME_PARTS = ("..", "/", "\\", "\x00")


def validate_filename(filename: str) -> str:
    if not filename or any(part in filename for part in _FORBIDDEN_FILENAME_PARTS):
        logger.warning("Rejected product image filename", filename=filename)
        raise ClientError("Invalid filename")
    return filename


def content_type_for(filename: str) -> str:
    return CONTENT_TYPES.get(Path(filename).suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_local_path(uploads_dir: Path, filename: str) -> Optional[Path]:
    """Resolve ``filename`` inside ``uploads_dir``.

    Blocking; call it from a worker thread.

    Returns:
        The canonical path, or None if the name cannot be resolved

    Raises:
        SecurityError: If the canonical path is outside the uploads directory
    """
    try:
        root = uploads_dir.resolve()
        candidate = (root / filename).resolve()
    except (OSError, ValueError) as e:
        logger.info("Local image path not resolvable", filename=filename, error=str(e))
        return None

    if not candidate.is_relative_to(root):
        logger.warning(
            "Product image path escapes uploads directory",
            filename=filename,
            resolved=str(candidate),
        )
        raise SecurityError("Access denied")
    return candidate


def load_local_image(uploads_dir: Path, filename: str) -> Optional[bytes]:
    path = resolve_local_path(uploads_dir, filename)
    if path is None:
        return None

    try:
        return path.read_bytes()
    except (OSError, ValueError) as e:
        logger.info("Local image read failed", path=str(path), error=str(e))
        return None


def placeholder_url(request: Request, placeholder: str) -> str:
    return urljoin(str(request.base_url), placeholder)


async def stream_image_body(response: httpx.Response) -> AsyncIterator[bytes]:
    try:
        async for chunk in response.aiter_bytes(chunk_size=STREAM_CHUNK_SIZE):
            yield chunk
    finally:
        await response.aclose()


async def fetch_remote_image(
    proxy: BackendProxy, filename: str, cache_control: str
) -> Optional[Response]:
    try:
        response = await proxy.send(
            "GET",
            f"/api/uploads/products/{encode_path_segment(filename)}",
            failure_message="Backend image fetch failed",
            accept="image/*",
            stream=True,
        )
    except TransportError as e:
        logger.warning("Backend image fetch failed", filename=filename, error=e.error)
        return None

    if not response.is_success:
        logger.info(
            "Backend has no image",
            filename=filename,
            status_code=response.status_code,
        )
        await response.aclose()
        return None

    return StreamingResponse(
        content=stream_image_body(response),
        media_type=response.headers.get("content-type") or DEFAULT_CONTENT_TYPE,
        headers={"Cache-Control": cache_control},
    )


async def resolve_product_image(
    request: Request,
    proxy: BackendProxy,
    filename: str,
    *,
    uploads_dir: Path,
    placeholder: str,
    cache_control: str,
) -> Response:
    """Serve a product image from the backend, local disk or a placeholder.

    Raises:
        ClientError: If the filename is empty or contains path components
        SecurityError: If the local path escapes the uploads directory
    """
    validate_filename(filename)

    remote = await fetch_remote_image(proxy, filename, cache_control)
    if remote is not None:
        return remote

    data = await run_in_threadpool(load_local_image, uploads_dir, filename)
    if data is not None:
        logger.info("Serving product image from local uploads", filename=filename)
        return Response(
            content=data,
            media_type=content_type_for(filename),
            headers={
                "Cache-Control": cache_control,
                DATA_SOURCE_HEADER: LOCAL_FALLBACK,
            },
        )

    logger.info("Redirecting to placeholder image", filename=filename)
    return RedirectResponse(placeholder_url(request, placeholder))
