from fastapi import APIRouter, Response

from app.packages.backend_proxy import CORS_HEADERS

router = APIRouter(tags=["CORS"])


@router.options("/{path:path}", include_in_schema=False)
async def preflight(path: str):
    """Answer CORS preflight requests for every gateway route locally."""
    return Response(status_code=200, headers=CORS_HEADERS)
