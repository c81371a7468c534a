from typing import Annotated

from fastapi import APIRouter, Query, Response

from app.deps.backend import BackendProxyDep, RateFallbackDep
from app.packages.backend_proxy import CORS_HEADERS, relay_response
from app.packages.rate_fallback import MAX_HISTORY_DAYS
from app.services.rates_service import fetch_with_fallback

router = APIRouter(prefix="/rate", tags=["Rates"])


@router.get("/today")
async def today_rate(proxy: BackendProxyDep, fallback: RateFallbackDep):
    return await fetch_with_fallback(
        proxy,
        "/api/rate/today",
        fallback.today,
        failure_message="Failed to fetch today's rates",
    )


@router.get("/history")
async def rate_history(
    proxy: BackendProxyDep,
    fallback: RateFallbackDep,
    days: Annotated[int, Query(ge=1, le=MAX_HISTORY_DAYS)] = 7,
):
    return await fetch_with_fallback(
        proxy,
        "/api/rate/history",
        lambda: fallback.history(days),
        params={"days": days},
        failure_message="Failed to fetch historical rates",
    )


@router.get("/predict")
async def rate_prediction(proxy: BackendProxyDep, fallback: RateFallbackDep):
    return await fetch_with_fallback(
        proxy,
        "/api/rate/predict",
        fallback.prediction,
        failure_message="Failed to fetch prediction",
    )


@router.get("/health")
async def rate_health(proxy: BackendProxyDep):
    """Pass the backend health probe through.

    The backend answers with plain text, so the body is relayed as received.
    """
    failure_message = "Backend health check failed"
    response = await proxy.send(
        "GET", "/api/rate/health", failure_message=failure_message, accept="*/*"
    )
    if not response.is_success:
        return relay_response(response, failure_message=failure_message)

    return Response(
        content=response.content,
        status_code=response.status_code,
        media_type=response.headers.get("content-type", "text/plain"),
        headers=CORS_HEADERS,
    )
