"""Gateway error taxonomy.

Every error carries the HTTP status it maps to and renders to the uniform
``{"message": ...}`` envelope returned to the UI.
"""

from typing import Any, Optional


class GatewayError(Exception):
    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error: Optional[str] = None,
        extra: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        self.extra = extra or {}
        if status_code is not None:
            self.status_code = status_code

    def to_content(self) -> dict[str, Any]:
        content: dict[str, Any] = {**self.extra, "message": self.message}
        if self.error is not None:
            content["error"] = self.error
        return content


class ClientError(GatewayError):
    """Request rejected before any backend call (bad id, body or filename)."""

    status_code = 400


class AuthorizationRequired(ClientError):
    status_code = 401

    def __init__(self, message: str = "Authorization header required"):
        super().__init__(message)


class BackendError(GatewayError):
    """The backend answered with a non-2xx status; status is propagated."""

    def __init__(
        self,
        message: str,
        status_code: int,
        extra: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, status_code=status_code, extra=extra)


class TransportError(GatewayError):
    """The backend could not be reached or returned an unreadable response."""

    status_code = 500


class SecurityError(GatewayError):
    status_code = 403
