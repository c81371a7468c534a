import structlog
from fastapi import APIRouter, Request

from app.deps.auth import Authorization
from app.deps.backend import BackendProxyDep, JsonBody
from app.packages.backend_proxy import ClientError, require_identifier

logger = structlog.stdlib.get_logger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/assets")
async def list_assets(
    request: Request, authorization: Authorization, proxy: BackendProxyDep
):
    return await proxy.forward(
        "GET",
        "/api/admin/assets",
        authorization=authorization,
        params=request.query_params,
        failure_message="Failed to fetch assets",
        cors=True,
    )


@router.post("/rates/update")
async def update_rates(
    authorization: Authorization, proxy: BackendProxyDep, body: JsonBody
):
    logger.info("Forwarding manual rate update")
    return await proxy.forward(
        "POST",
        "/api/admin/rates/update",
        authorization=authorization,
        json_body=body,
        failure_message="Failed to update rates",
        cors=True,
    )


@router.get("/products")
async def list_products(
    request: Request, authorization: Authorization, proxy: BackendProxyDep
):
    return await proxy.forward(
        "GET",
        "/api/admin/products",
        authorization=authorization,
        params=request.query_params,
        failure_message="Failed to fetch products",
        cors=True,
    )


@router.post("/products")
async def create_product(
    request: Request, authorization: Authorization, proxy: BackendProxyDep
):
    """Create a product.

    Accepts multipart form data (product fields plus image files) or JSON;
    the body is passed to the backend without being re-encoded.
    """
    return await proxy.forward_body(
        request,
        "POST",
        "/api/admin/products",
        authorization=authorization,
        failure_message="Failed to create product",
    )


@router.put("/products")
@router.delete("/products")
async def product_id_missing(authorization: Authorization):
    raise ClientError("Product ID is required")


@router.put("/products/{product_id}")
async def update_product(
    product_id: str,
    request: Request,
    authorization: Authorization,
    proxy: BackendProxyDep,
):
    product_path = require_identifier(product_id, "Product ID")
    return await proxy.forward_body(
        request,
        "PUT",
        f"/api/admin/products/{product_path}",
        authorization=authorization,
        failure_message="Failed to update product",
    )


@router.delete("/products/{product_id}")
async def delete_product(
    product_id: str, authorization: Authorization, proxy: BackendProxyDep
):
    product_path = require_identifier(product_id, "Product ID")
    return await proxy.forward(
        "DELETE",
        f"/api/admin/products/{product_path}",
        authorization=authorization,
        failure_message="Failed to delete product",
    )


@router.patch("/products/{product_id}/status")
async def update_product_status(
    product_id: str,
    authorization: Authorization,
    proxy: BackendProxyDep,
    body: JsonBody,
):
    product_path = require_identifier(product_id, "Product ID")
    return await proxy.forward(
        "PATCH",
        f"/api/admin/products/{product_path}/status",
        authorization=authorization,
        json_body=body,
        failure_message="Failed to update product status",
    )
