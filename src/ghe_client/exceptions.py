"""Typed error taxonomy for ghe-client.

Every failure surfaced to callers is one of these classes, never a raw status
code. Caller misuse (ArgumentInvalidError) is detected before any I/O; the
ApiError family describes server and transport outcomes after I/O.

    GitHubClientError
    ├── ArgumentInvalidError      (also a ValueError)
    ├── CodecError
    └── ApiError
        ├── NotFoundError
        ├── ApiValidationError
        ├── RateLimitExceeded
        ├── AuthorizationError
        ├── ForbiddenError
        ├── ServerError
        └── TransportError
"""

from datetime import datetime
from enum import Enum

__all__ = [
    "ApiError",
    "ApiValidationError",
    "ArgumentInvalidError",
    "AuthorizationError",
    "CodecError",
    "ErrorKind",
    "ForbiddenError",
    "GitHubClientError",
    "NotFoundError",
    "RateLimitExceeded",
    "ServerError",
    "TransportError",
]


class ErrorKind(str, Enum):
    """Classified failure kinds."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    RATE_LIMITED = "rate_limited"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"
    TRANSPORT_FAILURE = "transport_failure"
    ARGUMENT_INVALID = "argument_invalid"


class GitHubClientError(Exception):
    """Base class for every error raised by this library."""

    kind: ErrorKind | None = None


class ArgumentInvalidError(GitHubClientError, ValueError):
    """Raised before any network call when a required argument is missing or invalid."""

    kind = ErrorKind.ARGUMENT_INVALID

    def __init__(self, parameter_name: str, message: str | None = None):
        self.parameter_name = parameter_name
        super().__init__(message or f"Argument '{parameter_name}' is required")


class CodecError(GitHubClientError):
    """Raised when a request body cannot be encoded or a 2xx body cannot be decoded."""

    pass


class ApiError(GitHubClientError):
    """Raised when an API call fails after reaching the transport.

    Attributes:
        status_code: HTTP status of the failed exchange (None for transport failures)
        api_message: The "message" field of the error body, when present
        documentation_url: The "documentation_url" field of the error body, when present
    """

    kind = ErrorKind.SERVER_ERROR

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        api_message: str | None = None,
        documentation_url: str | None = None,
    ):
        self.status_code = status_code
        self.api_message = api_message
        self.documentation_url = documentation_url
        super().__init__(message)


class NotFoundError(ApiError):
    """404: the resource does not exist (or is hidden from the caller)."""

    kind = ErrorKind.NOT_FOUND


class ApiValidationError(ApiError):
    """422, or 400 with a structured validation body.

    Attributes:
        messages: Human-readable validation messages extracted from the body
    """

    kind = ErrorKind.VALIDATION_FAILED

    def __init__(self, messages: list[str], status_code: int = 422, **kwargs):
        self.messages = list(messages)
        summary = "; ".join(self.messages) if self.messages else "Validation Failed"
        super().__init__(f"GitHub API error {status_code}: {summary}", status_code, **kwargs)


class RateLimitExceeded(ApiError):
    """Raised when GitHub rate limit is exhausted."""

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        reset_at: datetime | None,
        message: str = "Rate limit exceeded",
        status_code: int = 403,
        limit: int | None = None,
        remaining: int | None = None,
        **kwargs,
    ):
        self.reset_at = reset_at
        self.limit = limit
        self.remaining = remaining
        resets = reset_at.isoformat() if reset_at else "unknown"
        super().__init__(f"{message}. Resets at {resets}", status_code, **kwargs)


class AuthorizationError(ApiError):
    """401: missing or bad credentials."""

    kind = ErrorKind.UNAUTHORIZED


class ForbiddenError(ApiError):
    """403 without rate-limit signals: authenticated but not permitted."""

    kind = ErrorKind.FORBIDDEN


class ServerError(ApiError):
    """5xx, or any other unclassified status >= 400."""

    kind = ErrorKind.SERVER_ERROR

    def __init__(self, status_code: int, message: str | None = None, **kwargs):
        super().__init__(
            message or f"GitHub API server error {status_code}", status_code, **kwargs
        )


class TransportError(ApiError):
    """No response was received: connection failure, timeout, protocol error.

    Attributes:
        cause: The underlying transport exception
    """

    kind = ErrorKind.TRANSPORT_FAILURE

    def __init__(self, cause: BaseException, message: str | None = None):
        self.cause = cause
        super().__init__(message or f"HTTP transport error: {cause!r}")
