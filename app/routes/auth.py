import structlog
from fastapi import APIRouter

from app.deps.auth import Authorization
from app.deps.backend import BackendProxyDep, JsonBody
from app.packages.backend_proxy import require_identifier

logger = structlog.stdlib.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signin")
async def signin(proxy: BackendProxyDep, body: JsonBody):
    return await proxy.forward(
        "POST",
        "/api/auth/signin",
        json_body=body,
        failure_message="Sign in failed",
        cors=True,
    )


@router.post("/signup")
async def signup(proxy: BackendProxyDep, body: JsonBody):
    return await proxy.forward(
        "POST",
        "/api/auth/signup",
        json_body=body,
        failure_message="Sign up failed",
        cors=True,
    )


@router.post("/forgot-password")
async def forgot_password(proxy: BackendProxyDep, body: JsonBody):
    return await proxy.forward(
        "POST",
        "/api/auth/forgot-password",
        json_body=body,
        failure_message="Failed to send reset email",
    )


@router.post("/reset-password")
async def reset_password(proxy: BackendProxyDep, body: JsonBody):
    return await proxy.forward(
        "POST",
        "/api/auth/reset-password",
        json_body=body,
        failure_message="Failed to reset password",
        cors=True,
    )


@router.get("/verify-reset-token/{token}")
async def verify_reset_token(token: str, proxy: BackendProxyDep):
    """Check a password reset token.

    Errors carry ``valid: false`` next to the message so the reset form can
    branch on a single field.
    """
    logger.info("Verifying reset token", token_prefix=token[:10])
    return await proxy.forward(
        "GET",
        f"/api/auth/verify-reset-token/{require_identifier(token, 'Reset token')}",
        failure_message="Token verification failed",
        cors=True,
        error_extra={"valid": False},
    )


@router.get("/profile")
async def get_profile(authorization: Authorization, proxy: BackendProxyDep):
    return await proxy.forward(
        "GET",
        "/api/auth/profile",
        authorization=authorization,
        failure_message="Failed to fetch profile",
        cors=True,
    )


@router.put("/profile")
async def update_profile(
    authorization: Authorization, proxy: BackendProxyDep, body: JsonBody
):
    return await proxy.forward(
        "PUT",
        "/api/auth/profile",
        authorization=authorization,
        json_body=body,
        failure_message="Failed to update profile",
        cors=True,
    )
