"""EasyRAG SDK exceptions."""

from typing import Any


class EasyRAGError(Exception):
    """Base exception for all EasyRAG SDK errors.

    Every failure surfaced by the client is an instance of this class and
    carries the normalized shape: message, optional HTTP status, optional
    service error code and optional detail payload.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        code: str | None = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.code = code
        self.details = details

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(message={self.message!r}, status={self.status!r}, "
            f"code={self.code!r})"
        )


class ConfigurationError(EasyRAGError):
    """Raised when the client is constructed with missing or invalid settings."""


class RequestTimeoutError(EasyRAGError):
    """Raised when the configured timeout elapses before the exchange completes."""

    def __init__(self, message: str = "Request timeout", details: Any = None):
        super().__init__(message, details=details)


class NetworkError(EasyRAGError):
    """Raised on a connection-level failure unrelated to the timeout."""

    def __init__(self, message: str = "Network error", details: Any = None):
        super().__init__(message, details=details)


class StreamingError(EasyRAGError):
    """Raised when a stream fails after a successful response was received."""


class UnexpectedResponseError(EasyRAGError):
    """Raised when a successful response body does not have the documented shape."""


class APIStatusError(EasyRAGError):
    """Raised when the service answers with a non-2xx status."""


class BadRequestError(APIStatusError):
    """Raised when the request is rejected as invalid (400, 422)."""


class AuthenticationError(APIStatusError):
    """Raised when the credential is missing, invalid or lacks access (401, 403)."""


class InsufficientCreditsError(APIStatusError):
    """Raised when the account has no credits left for the operation (402)."""


class NotFoundError(APIStatusError):
    """Raised when a file or dataset does not exist (404)."""


class RateLimitError(APIStatusError):
    """Raised when the rate limit is exceeded (429)."""


class ServerError(APIStatusError):
    """Raised on a server-side failure (5xx)."""


_STATUS_ERRORS: dict[int, type[APIStatusError]] = {
    400: BadRequestError,
    401: AuthenticationError,
    402: InsufficientCreditsError,
    403: AuthenticationError,
    404: NotFoundError,
    422: BadRequestError,
    429: RateLimitError,
}


def error_from_response(status: int, body: Any) -> APIStatusError:
    """
    Build the error for a non-2xx response.

    Args:
        status: HTTP status code.
        body: Parsed JSON body, or None when the body was empty or not JSON.

    Returns:
        An APIStatusError subclass chosen by status. The message comes from
        the body's ``error`` or ``message`` field, falling back to
        ``"HTTP <status>"``; ``error`` doubles as the service error code.
    """
    if not isinstance(body, dict):
        body = {}

    code = body.get("error")
    message = code or body.get("message") or f"HTTP {status}"

    if status >= 500:
        error_cls: type[APIStatusError] = ServerError
    else:
        error_cls = _STATUS_ERRORS.get(status, APIStatusError)

    return error_cls(
        str(message),
        status=status,
        code=str(code) if code is not None else None,
        details=body.get("details"),
    )
