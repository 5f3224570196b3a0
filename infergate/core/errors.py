"""Project error hierarchy."""

from __future__ import annotations


class InferGateError(Exception):
    """Base error. ``kind`` names the failure class, ``cause`` the wrapped error if any."""

    kind = "gateway_error"
    status_code = 500

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class RequestRejectedError(InferGateError):
    """Raised when the inbound request cannot be accepted."""

    status_code = 400


class MethodNotAllowed(RequestRejectedError):
    kind = "method_not_allowed"
    status_code = 405


class MalformedPayload(RequestRejectedError):
    kind = "malformed_payload"
    status_code = 400


class ForwardError(InferGateError):
    """Raised when relaying to the backend fails; always surfaced as 502."""

    kind = "forward_error"
    status_code = 502


class TransportError(ForwardError):
    kind = "transport_error"


class BackendError(ForwardError):
    kind = "backend_error"

    def __init__(self, upstream_status: int, body: str) -> None:
        super().__init__(f"backend returned status {upstream_status}: {body}")
        self.upstream_status = upstream_status
        self.body = body


class DecodeError(ForwardError):
    kind = "decode_error"
