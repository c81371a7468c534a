from fastapi import APIRouter, Request

from app.deps.auth import Authorization
from app.deps.backend import BackendProxyDep, JsonBody
from app.packages.backend_proxy import require_identifier
from app.services.address_service import validate_address

router = APIRouter(prefix="/shop", tags=["Shop"])


@router.get("/products")
async def list_products(
    request: Request, authorization: Authorization, proxy: BackendProxyDep
):
    return await proxy.forward(
        "GET",
        "/api/shop/products",
        authorization=authorization,
        params=request.query_params,
        failure_message="Failed to fetch products",
        cors=True,
    )


# Cart


@router.get("/cart")
async def get_cart(authorization: Authorization, proxy: BackendProxyDep):
    return await proxy.forward(
        "GET",
        "/api/shop/cart",
        authorization=authorization,
        failure_message="Failed to fetch cart",
        cors=True,
    )


@router.post("/cart")
async def update_cart(
    authorization: Authorization, proxy: BackendProxyDep, body: JsonBody
):
    return await proxy.forward(
        "POST",
        "/api/shop/cart",
        authorization=authorization,
        json_body=body,
        failure_message="Failed to update cart",
    )


@router.post("/cart/add")
async def add_to_cart(
    authorization: Authorization, proxy: BackendProxyDep, body: JsonBody
):
    return await proxy.forward(
        "POST",
        "/api/shop/cart/add",
        authorization=authorization,
        json_body=body,
        failure_message="Failed to add to cart",
    )


# Addresses


@router.get("/addresses")
async def list_addresses(
    request: Request, authorization: Authorization, proxy: BackendProxyDep
):
    return await proxy.forward(
        "GET",
        "/api/shop/addresses",
        authorization=authorization,
        params=request.query_params,
        failure_message="Failed to fetch addresses",
        cors=True,
    )


@router.post("/addresses")
async def create_address(
    authorization: Authorization, proxy: BackendProxyDep, body: JsonBody
):
    return await proxy.forward(
        "POST",
        "/api/shop/addresses",
        authorization=authorization,
        json_body=validate_address(body),
        failure_message="Failed to create address",
        cors=True,
    )


# Declared before /addresses/{address_id} so "default" is not taken as an id
@router.get("/addresses/default")
async def get_default_address(authorization: Authorization, proxy: BackendProxyDep):
    return await proxy.forward(
        "GET",
        "/api/shop/addresses/default",
        authorization=authorization,
        failure_message="No default address found",
        cors=True,
    )


@router.get("/addresses/{address_id}")
async def get_address(
    address_id: str, authorization: Authorization, proxy: BackendProxyDep
):
    address_path = require_identifier(address_id, "Address ID")
    return await proxy.forward(
        "GET",
        f"/api/shop/addresses/{address_path}",
        authorization=authorization,
        failure_message="Address not found",
        cors=True,
    )


@router.put("/addresses/{address_id}")
async def update_address(
    address_id: str,
    authorization: Authorization,
    proxy: BackendProxyDep,
    body: JsonBody,
):
    address_path = require_identifier(address_id, "Address ID")
    return await proxy.forward(
        "PUT",
        f"/api/shop/addresses/{address_path}",
        authorization=authorization,
        json_body=validate_address(body),
        failure_message="Failed to update address",
    )


@router.delete("/addresses/{address_id}")
async def delete_address(
    address_id: str, authorization: Authorization, proxy: BackendProxyDep
):
    address_path = require_identifier(address_id, "Address ID")
    return await proxy.forward(
        "DELETE",
        f"/api/shop/addresses/{address_path}",
        authorization=authorization,
        failure_message="Failed to delete address",
    )
