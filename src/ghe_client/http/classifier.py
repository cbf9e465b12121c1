"""Maps failed exchanges to the typed error taxonomy.

Status-to-kind table, first match wins:

    404                                          -> NotFoundError
    422, or 400 with an "errors" array           -> ApiValidationError
    403/429 with rate-limit signal               -> RateLimitExceeded
    401                                          -> AuthorizationError
    403                                          -> ForbiddenError
    >= 500                                       -> ServerError
    no response (httpx transport failure)        -> TransportError
    anything else >= 400                         -> ServerError

Classification never raises. If anything goes wrong while reading the body
the result degrades to ServerError carrying the raw status.
"""

import json
import logging
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

import httpx

from ..exceptions import (
    ApiError,
    ApiValidationError,
    AuthorizationError,
    ForbiddenError,
    NotFoundError,
    RateLimitExceeded,
    ServerError,
    TransportError,
)

logger = logging.getLogger("ghe_client.classifier")

__all__ = [
    "classify_response",
    "classify_transport_error",
    "extract_validation_messages",
    "rate_limit_reset_at",
]


def _decode_json(body: bytes) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except (ValueError, UnicodeDecodeError):
        return None


def _body_text(body: bytes) -> str:
    return body.decode("utf-8", errors="replace").strip()


def extract_validation_messages(body: bytes) -> list[str]:
    """Pull human-readable messages out of a validation error body.

    GitHub shape: {"message": "Validation Failed",
                   "errors": [{"resource": "Hook", "field": "name", "code": "already_exists"}]}

    Each errors[] entry contributes its "message", or "<resource>.<field> <code>"
    when it has none. A body that is not structured JSON contributes its raw
    text as the only message.
    """
    data = _decode_json(body)
    if not isinstance(data, dict):
        text = _body_text(body)
        return [text] if text else []

    messages: list[str] = []
    if data.get("message"):
        messages.append(str(data["message"]))

    errors = data.get("errors")
    if isinstance(errors, list):
        for entry in errors:
            if isinstance(entry, str):
                messages.append(entry)
            elif isinstance(entry, dict):
                if entry.get("message"):
                    messages.append(str(entry["message"]))
                else:
                    target = ".".join(
                        str(entry[k]) for k in ("resource", "field") if entry.get(k)
                    )
                    code = entry.get("code", "invalid")
                    messages.append(f"{target} {code}".strip())
    return messages


def rate_limit_reset_at(headers: Mapping[str, str]) -> datetime | None:
    """When the rate limit resets: X-RateLimit-Reset, else now + Retry-After."""
    reset = headers.get("X-RateLimit-Reset")
    if reset:
        try:
            return datetime.fromtimestamp(float(reset), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.warning("non_numeric_header", extra={"header": "X-RateLimit-Reset", "value": reset})

    retry_after = headers.get("Retry-After")
    if retry_after:
        try:
            return datetime.fromtimestamp(time.time() + float(retry_after), tz=timezone.utc)
        except (ValueError, OverflowError, OSError):
            logger.warning("non_numeric_header", extra={"header": "Retry-After", "value": retry_after})
    return None


def _is_rate_limited(headers: Mapping[str, str]) -> bool:
    return headers.get("X-RateLimit-Remaining") == "0" or bool(headers.get("Retry-After"))


def _int_header(headers: Mapping[str, str], name: str) -> int | None:
    try:
        return int(headers[name])
    except (KeyError, ValueError):
        return None


def _classify(status_code: int, headers: Mapping[str, str], body: bytes) -> ApiError:
    data = _decode_json(body)
    api_message = None
    documentation_url = None
    if isinstance(data, dict):
        api_message = data.get("message")
        documentation_url = data.get("documentation_url")
    detail = {"api_message": api_message, "documentation_url": documentation_url}
    message = f"GitHub API error {status_code}: {api_message or _body_text(body) or 'no body'}"

    if status_code == 404:
        return NotFoundError(message, status_code, **detail)

    if status_code == 422 or (
        status_code == 400 and isinstance(data, dict) and isinstance(data.get("errors"), list)
    ):
        return ApiValidationError(
            extract_validation_messages(body), status_code=status_code, **detail
        )

    if status_code in (403, 429) and _is_rate_limited(headers):
        secondary = status_code == 429 or bool(headers.get("Retry-After"))
        return RateLimitExceeded(
            rate_limit_reset_at(headers),
            "Secondary rate limit exceeded" if secondary else "Rate limit exceeded",
            status_code=status_code,
            limit=_int_header(headers, "X-RateLimit-Limit"),
            remaining=_int_header(headers, "X-RateLimit-Remaining"),
            **detail,
        )

    if status_code == 401:
        return AuthorizationError(message, status_code, **detail)

    if status_code == 403:
        return ForbiddenError(message, status_code, **detail)

    return ServerError(status_code, message, **detail)


def classify_response(
    status_code: int, headers: Mapping[str, str], body: bytes | None
) -> ApiError:
    """Classify a non-2xx exchange.

    Args:
        status_code: HTTP status (expected >= 400; other values fall back to ServerError)
        headers: Response headers; pass httpx.Headers for case-insensitive lookup
        body: Raw response body

    Returns:
        Exactly one ApiError subclass instance (never raises)
    """
    try:
        if not isinstance(headers, httpx.Headers):
            headers = httpx.Headers(headers or {})
        return _classify(status_code, headers, body or b"")
    except Exception:
        logger.exception("error_classification_failed", extra={"status_code": status_code})
        return ServerError(status_code)


def classify_transport_error(exc: BaseException) -> TransportError:
    """Wrap an exception raised before any response was received."""
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(exc, f"Request timed out: {exc!r}")
    return TransportError(exc)
