from datetime import datetime, timezone
from typing import Literal

from fastapi import APIRouter
from typing_extensions import NotRequired, TypedDict

from app.deps.backend import BackendConfigDep, BackendProxyDep
from app.packages.backend_proxy import TransportError
from app.settings import settings

router = APIRouter(tags=["Health"])


class HealthResponse(TypedDict):
    frontend: Literal["running"]
    backend: Literal["connected", "disconnected"]
    timestamp: str
    backendUrl: str
    backendMessage: NotRequired[str]
    error: NotRequired[str]


@router.get("/health", responses={200: {"model": HealthResponse}})
async def health(proxy: BackendProxyDep, config: BackendConfigDep):
    """Report whether the backend answers its health probe.

    Always 200; the UI shows a connection badge from the ``backend`` field.
    """
    result: HealthResponse = {
        "frontend": "running",
        "backend": "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backendUrl": config.base_url,
    }

    try:
        response = await proxy.send(
            "GET",
            "/api/rate/health",
            failure_message="Backend not reachable",
            timeout=settings.HEALTH_TIMEOUT_SECONDS,
            accept="*/*",
        )
    except TransportError as e:
        result["error"] = e.error or e.message
        return result

    if response.is_success:
        result["backend"] = "connected"
        result["backendMessage"] = response.text
    else:
        result["backendMessage"] = f"HTTP {response.status_code}: {response.text}"

    return result
