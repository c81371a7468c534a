from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header

from app.packages.backend_proxy import AuthorizationRequired

logger = structlog.stdlib.get_logger(__name__)


async def require_authorization(
    authorization: Annotated[Optional[str], Header()] = None,
) -> str:
    """Return the inbound Authorization header exactly as received.

    The gateway never validates the token itself; the backend does. A missing
    or blank header is rejected here, before any backend call.
    """
    if authorization is None or not authorization.strip():
        logger.info("Rejected request without Authorization header")
        raise AuthorizationRequired()

    structlog.contextvars.bind_contextvars(authenticated=True)
    return authorization


Authorization = Annotated[str, Depends(require_authorization)]
