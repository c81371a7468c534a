from pathlib import Path

from fastapi import APIRouter, Request

from app.deps.backend import BackendProxyDep
from app.services.product_image_service import resolve_product_image
from app.settings import settings

router = APIRouter(prefix="/uploads", tags=["Uploads"])


# ":path" so traversal attempts reach the filename check instead of a 404
@router.get("/products/{filename:path}")
async def get_product_image(filename: str, request: Request, proxy: BackendProxyDep):
    return await resolve_product_image(
        request,
        proxy,
        filename,
        uploads_dir=Path(settings.UPLOADS_DIR),
        placeholder=settings.PLACEHOLDER_IMAGE_PATH,
        cache_control=settings.IMAGE_CACHE_CONTROL,
    )
