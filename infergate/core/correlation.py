"""Request correlation id resolution."""

from __future__ import annotations

import uuid
from typing import Mapping

REQUEST_ID_HEADER = "X-Request-ID"
REQUEST_ID_ALIAS_HEADER = "Request-Id"


def _header_value(headers: Mapping[str, str], target: str) -> str:
    for key, value in headers.items():
        if key.lower() == target.lower():
            return value
    return ""


def resolve_request_id(headers: Mapping[str, str]) -> str:
    """Return the caller's request id, or a fresh uuid4 when none was sent.

    Caller-supplied ids are not validated; they are reflected verbatim in the
    response header, the response body and the logs.
    """
    for name in (REQUEST_ID_HEADER, REQUEST_ID_ALIAS_HEADER):
        value = _header_value(headers, name)
        if value:
            return value
    return str(uuid.uuid4())
