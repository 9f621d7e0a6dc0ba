"""Error taxonomy for relay, validation and storage failures."""


class PinAuthError(Exception):
    """Base error for the pin authenticator."""

    error_code = "error"


class ValidationError(PinAuthError):
    """Raised when a caller supplies malformed input."""

    error_code = "validation_error"


class NotFoundError(PinAuthError):
    """Raised when a well-formed request references a missing record."""

    error_code = "not_found"


class RelayError(PinAuthError):
    """Base error for failed calls to the remote authentication service."""

    error_code = "relay_error"


class NetworkError(RelayError):
    """The remote service could not be reached."""

    error_code = "network_error"


class RelayTimeoutError(RelayError, TimeoutError):
    """The remote service did not answer within the timeout budget."""

    error_code = "timeout"

    def __init__(self, timeout_seconds: float) -> None:
        super().__init__(f"Remote service timed out after {timeout_seconds:g}s")
        self.timeout_seconds = timeout_seconds


class RemoteServiceError(RelayError):
    """The remote service answered with a non-2xx status."""

    error_code = "remote_error"

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Remote service returned {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ServiceUnavailableError(RemoteServiceError):
    """The remote service is temporarily down (502, 503 or 504)."""

    error_code = "service_unavailable"


SERVICE_UNAVAILABLE_STATUSES = frozenset({502, 503, 504})


def remote_error_for_status(status_code: int, body: str) -> RemoteServiceError:
    """Return the error class matching a non-2xx remote status."""
    if status_code in SERVICE_UNAVAILABLE_STATUSES:
        return ServiceUnavailableError(status_code, body)
    return RemoteServiceError(status_code, body)
