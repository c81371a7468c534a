from contextlib import asynccontextmanager

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.factories import backend_config_factory
from app.packages.backend_proxy import GatewayError
from app.routes import admin, auth, health, preflight, rates, shop, uploads
from app.utils.logging import setup_logger
from app.utils.sentry import init_sentry

logger = structlog.stdlib.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Gateway starting", backend_url=backend_config_factory().base_url)
    yield


init_sentry()
app = FastAPI(title="KnowAllRates Gateway", lifespan=lifespan)
setup_logger(app)


api_router = APIRouter(prefix="/api")


@app.exception_handler(GatewayError)
async def gateway_exception_handler(request: Request, exc: GatewayError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_content())


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation error",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal Server Error", "error": str(exc)},
    )


api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(admin.router)
api_router.include_router(rates.router)
api_router.include_router(shop.router)
api_router.include_router(uploads.router)
api_router.include_router(preflight.router)
app.include_router(api_router)
