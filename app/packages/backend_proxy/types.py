"""Backend proxy types and data structures.

This module contains shared types used across the backend proxy package.
No dependencies on app.* modules to maintain independence.
"""

from dataclasses import dataclass
from enum import Enum
from urllib.parse import quote

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, PATCH, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}

DATA_SOURCE_HEADER = "X-Data-Source"
ERROR_HEADER = "X-Error"


class BodyKind(str, Enum):
    """How an inbound request body is forwarded to the backend."""

    JSON = "json"
    MULTIPART = "multipart"


def normalize_base_url(base_url: str) -> str:
    """Strip trailing slashes from the backend base URL.

    Example:
        "http://backend:8080//" -> "http://backend:8080"
    """
    return base_url.strip().rstrip("/")


def encode_path_segment(value: str) -> str:
    """Percent-encode a single path segment (ids, tokens, filenames)."""
    return quote(value, safe="")


@dataclass
class BackendConfig:
    """Configuration for the upstream REST backend.

    Attributes:
        base_url: Base URL of the backend (e.g., "http://localhost:8080").
                  Normalized once on construction.
        timeout: Timeout in seconds applied to every outbound call
        user_agent: User-Agent header sent on every outbound call
    """

    base_url: str
    timeout: float = 10.0
    user_agent: str = "KnowAllRates-Frontend/1.0"

    def __post_init__(self):
        self.base_url = normalize_base_url(self.base_url)

    def url_for(self, path: str) -> str:
        """Build the backend URL for a resource path.

        There is exactly one slash between the base URL and the path, whether
        or not the path carries a leading slash.
        """
        return f"{self.base_url}/{path.lstrip('/')}"
