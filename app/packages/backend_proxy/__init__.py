"""Backend proxy package.

This package provides the forwarding utilities and error taxonomy used by
every gateway route that talks to the upstream REST backend.
"""

from .errors import (
    AuthorizationRequired,
    BackendError,
    ClientError,
    GatewayError,
    SecurityError,
    TransportError,
)
from .proxy import (
    BackendProxy,
    detect_body_kind,
    extract_error_message,
    read_json_body,
    relay_response,
    require_identifier,
    stream_request_body,
)
from .types import (
    CORS_HEADERS,
    DATA_SOURCE_HEADER,
    ERROR_HEADER,
    BackendConfig,
    BodyKind,
    encode_path_segment,
    normalize_base_url,
)

__all__ = [
    # Proxy
    "BackendProxy",
    "detect_body_kind",
    "extract_error_message",
    "read_json_body",
    "relay_response",
    "require_identifier",
    "stream_request_body",
    # Types
    "BackendConfig",
    "BodyKind",
    "CORS_HEADERS",
    "DATA_SOURCE_HEADER",
    "ERROR_HEADER",
    "encode_path_segment",
    "normalize_base_url",
    # Errors
    "GatewayError",
    "ClientError",
    "AuthorizationRequired",
    "BackendError",
    "TransportError",
    "SecurityError",
]
