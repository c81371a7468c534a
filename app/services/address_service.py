import re
from typing import Any

from app.packages.backend_proxy import ClientError

REQUIRED_ADDRESS_FIELDS = (
    "fullName",
    "phoneNumber",
    "addressLine1",
    "city",
    "state",
    "pincode",
)

PHONE_NUMBER_PATTERN = re.compile(r"[6-9]\d{9}")
PINCODE_PATTERN = re.compile(r"[1-9][0-9]{5}")


def validate_address(body: Any) -> dict[str, Any]:
    """Check an address payload before it is sent to the backend.

    Raises:
        ClientError: On the first missing field or malformed value
    """
    if not isinstance(body, dict):
        raise ClientError("Request body must be a JSON object")

    for field in REQUIRED_ADDRESS_FIELDS:
        value = body.get(field)
        if not isinstance(value, str) or not value.strip():
            raise ClientError(f"{field} is required")

    if not PHONE_NUMBER_PATTERN.fullmatch(body["phoneNumber"]):
        raise ClientError("Please enter a valid 10-digit phone number")

    if not PINCODE_PATTERN.fullmatch(body["pincode"]):
        raise ClientError("Please enter a valid 6-digit pincode")

    return body
