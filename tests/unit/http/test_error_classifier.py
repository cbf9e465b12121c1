"""Unit tests for error classification.

Covers the status-to-kind table, rate-limit detection, validation message
extraction, and the never-raises guarantee.
"""

import time
from datetime import datetime, timezone

import httpx
import pytest

from ghe_client.exceptions import (
    ApiError,
    ApiValidationError,
    AuthorizationError,
    ErrorKind,
    ForbiddenError,
    NotFoundError,
    RateLimitExceeded,
    ServerError,
    TransportError,
)
from ghe_client.http.classifier import (
    classify_response,
    classify_transport_error,
    extract_validation_messages,
    rate_limit_reset_at,
)

VALIDATION_BODY = (
    b'{"message": "Validation Failed", "errors": '
    b'[{"resource": "PreReceiveHook", "code": "already_exists", "field": "name"}],'
    b' "documentation_url": "https://docs.github.com/rest"}'
)


class TestStatusTable:
    """Each status maps to exactly one error kind."""

    def test_404_not_found(self):
        error = classify_response(404, {}, b'{"message": "Not Found"}')
        assert isinstance(error, NotFoundError)
        assert error.kind is ErrorKind.NOT_FOUND
        assert error.status_code == 404
        assert error.api_message == "Not Found"

    def test_422_validation(self):
        error = classify_response(422, {}, VALIDATION_BODY)
        assert isinstance(error, ApiValidationError)
        assert error.kind is ErrorKind.VALIDATION_FAILED
        assert error.messages == ["Validation Failed", "PreReceiveHook.name already_exists"]
        assert error.documentation_url == "https://docs.github.com/rest"

    def test_400_with_errors_array_is_validation(self):
        error = classify_response(400, {}, VALIDATION_BODY)
        assert isinstance(error, ApiValidationError)
        assert error.status_code == 400

    def test_400_without_errors_is_server_error(self):
        error = classify_response(400, {}, b'{"message": "Problems parsing JSON"}')
        assert isinstance(error, ServerError)
        assert error.status_code == 400

    def test_401_authorization(self):
        error = classify_response(401, {}, b'{"message": "Bad credentials"}')
        assert isinstance(error, AuthorizationError)
        assert "Bad credentials" in str(error)

    def test_403_without_rate_limit_signal_is_forbidden(self):
        error = classify_response(
            403, {"X-RateLimit-Remaining": "4000"}, b'{"message": "Must have admin rights"}'
        )
        assert isinstance(error, ForbiddenError)
        assert error.kind is ErrorKind.FORBIDDEN

    def test_403_with_remaining_zero_is_rate_limit(self):
        reset = int(time.time()) + 600
        error = classify_response(
            403,
            {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": str(reset), "X-RateLimit-Limit": "5000"},
            b'{"message": "API rate limit exceeded"}',
        )
        assert isinstance(error, RateLimitExceeded)
        assert error.reset_at == datetime.fromtimestamp(reset, tz=timezone.utc)
        assert error.limit == 5000
        assert error.remaining == 0

    def test_403_with_retry_after_is_secondary_rate_limit(self):
        error = classify_response(403, {"Retry-After": "30"}, b"{}")
        assert isinstance(error, RateLimitExceeded)
        assert "Secondary" in str(error)
        assert error.reset_at is not None

    def test_429_with_retry_after_is_rate_limit(self):
        error = classify_response(429, {"Retry-After": "5"}, b"")
        assert isinstance(error, RateLimitExceeded)
        assert error.status_code == 429

    def test_429_without_signal_is_server_error(self):
        assert isinstance(classify_response(429, {}, b""), ServerError)

    @pytest.mark.parametrize("status", [500, 502, 503, 504])
    def test_5xx_server_error(self, status):
        error = classify_response(status, {}, b"<html>Bad gateway</html>")
        assert isinstance(error, ServerError)
        assert error.status_code == status

    @pytest.mark.parametrize("status", [405, 409, 415, 451])
    def test_other_4xx_fall_back_to_server_error(self, status):
        error = classify_response(status, {}, b"")
        assert type(error) is ServerError
        assert error.status_code == status

    def test_header_lookup_is_case_insensitive(self):
        error = classify_response(403, {"x-ratelimit-remaining": "0"}, b"")
        assert isinstance(error, RateLimitExceeded)

    def test_accepts_httpx_headers(self):
        error = classify_response(403, httpx.Headers({"Retry-After": "1"}), b"")
        assert isinstance(error, RateLimitExceeded)


class TestNeverRaises:
    """Classification degrades to ServerError instead of raising."""

    @pytest.mark.parametrize(
        "body",
        [b"", None, b"not json", b"\xff\xfe\x00", b"[1, 2, 3]", b'"just a string"', b"null"],
    )
    def test_malformed_bodies(self, body):
        error = classify_response(500, {}, body)
        assert isinstance(error, ApiError)
        assert error.status_code == 500

    def test_malformed_validation_body(self):
        error = classify_response(422, {}, b'{"errors": [42, null, {"code": "missing"}]}')
        assert isinstance(error, ApiValidationError)
        assert error.messages == ["missing"]

    def test_garbage_rate_limit_headers(self):
        error = classify_response(
            403, {"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "soon"}, b""
        )
        assert isinstance(error, RateLimitExceeded)
        assert error.reset_at is None
        assert "unknown" in str(error)

    def test_internal_failure_falls_back(self, monkeypatch):
        from ghe_client.http import classifier

        def boom(*args, **kwargs):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(classifier, "_classify", boom)
        error = classify_response(404, {}, b"")
        assert type(error) is ServerError
        assert error.status_code == 404


class TestValidationMessages:
    """extract_validation_messages formats GitHub validation bodies."""

    def test_entry_message_preferred(self):
        body = b'{"message": "Validation Failed", "errors": [{"message": "name is too long", "code": "custom"}]}'
        assert extract_validation_messages(body) == ["Validation Failed", "name is too long"]

    def test_string_entries(self):
        body = b'{"message": "Validation Failed", "errors": ["Repository does not exist"]}'
        assert extract_validation_messages(body) == ["Validation Failed", "Repository does not exist"]

    def test_raw_text_fallback(self):
        assert extract_validation_messages(b"Unprocessable") == ["Unprocessable"]

    def test_empty_body(self):
        assert extract_validation_messages(b"") == []

    def test_error_message_joins_messages(self):
        error = classify_response(422, {}, VALIDATION_BODY)
        assert str(error) == (
            "GitHub API error 422: Validation Failed; PreReceiveHook.name already_exists"
        )


class TestRateLimitResetAt:
    def test_reset_header_wins(self):
        reset_at = rate_limit_reset_at({"X-RateLimit-Reset": "1893456000", "Retry-After": "1"})
        assert reset_at == datetime.fromtimestamp(1893456000, tz=timezone.utc)

    def test_retry_after_relative_to_now(self):
        before = time.time()
        reset_at = rate_limit_reset_at({"Retry-After": "60"})
        assert before + 59 <= reset_at.timestamp() <= time.time() + 61

    def test_no_headers(self):
        assert rate_limit_reset_at({}) is None


class TestTransportErrors:
    def test_connect_error(self):
        cause = httpx.ConnectError("connection refused")
        error = classify_transport_error(cause)
        assert isinstance(error, TransportError)
        assert error.kind is ErrorKind.TRANSPORT_FAILURE
        assert error.cause is cause
        assert error.status_code is None

    def test_timeout_message(self):
        error = classify_transport_error(httpx.ReadTimeout("read timed out"))
        assert "timed out" in str(error)
