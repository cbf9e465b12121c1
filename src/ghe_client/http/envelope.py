"""Per-exchange response envelope and the API metadata parsed from its headers."""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx

logger = logging.getLogger("ghe_client.envelope")

__all__ = ["ApiInfo", "Envelope", "RateLimit", "parse_link_header"]

_LINK_PART = re.compile(r'\s*<([^>]+)>\s*;\s*rel="([^"]+)"')


def parse_link_header(link_header: str | None) -> dict[str, str]:
    """Parse an RFC 5988 Link header into a rel -> URL mapping.

    Format: <https://api.github.com/...?page=2>; rel="next", <...>; rel="last"

    Args:
        link_header: Raw Link header value (may be empty or None)

    Returns:
        Mapping of relation name to URL; empty if the header is absent
    """
    if not link_header:
        return {}

    links: dict[str, str] = {}
    for part in link_header.split(","):
        match = _LINK_PART.match(part)
        if match:
            url, rels = match.groups()
            # rel may hold several space-separated relation types
            for rel in rels.split():
                links.setdefault(rel, url)
    return links


def _parse_int(value: str | None, header: str) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning("non_numeric_header", extra={"header": header, "value": value})
        return None


@dataclass(frozen=True)
class RateLimit:
    """Rate limit state reported by the X-RateLimit-* headers."""

    limit: int | None
    remaining: int | None
    reset_at: datetime | None

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> "RateLimit | None":
        limit = _parse_int(headers.get("X-RateLimit-Limit"), "X-RateLimit-Limit")
        remaining = _parse_int(
            headers.get("X-RateLimit-Remaining"), "X-RateLimit-Remaining"
        )
        reset = _parse_int(headers.get("X-RateLimit-Reset"), "X-RateLimit-Reset")
        if limit is None and remaining is None and reset is None:
            return None
        reset_at = None
        if reset is not None:
            try:
                reset_at = datetime.fromtimestamp(reset, tz=timezone.utc)
            except (ValueError, OverflowError, OSError):
                logger.warning(
                    "non_numeric_header", extra={"header": "X-RateLimit-Reset", "value": reset}
                )
        return cls(limit=limit, remaining=remaining, reset_at=reset_at)


@dataclass(frozen=True)
class ApiInfo:
    """Metadata GitHub attaches to every response."""

    links: dict[str, str] = field(default_factory=dict)
    oauth_scopes: tuple[str, ...] = ()
    accepted_oauth_scopes: tuple[str, ...] = ()
    etag: str | None = None
    request_id: str | None = None
    rate_limit: RateLimit | None = None

    @staticmethod
    def _scopes(value: str | None) -> tuple[str, ...]:
        if not value:
            return ()
        return tuple(s.strip() for s in value.split(",") if s.strip())

    @classmethod
    def from_headers(cls, headers: httpx.Headers) -> "ApiInfo":
        return cls(
            links=parse_link_header(headers.get("Link")),
            oauth_scopes=cls._scopes(headers.get("X-OAuth-Scopes")),
            accepted_oauth_scopes=cls._scopes(headers.get("X-Accepted-OAuth-Scopes")),
            etag=headers.get("ETag"),
            request_id=headers.get("X-GitHub-Request-Id"),
            rate_limit=RateLimit.from_headers(headers),
        )


@dataclass
class Envelope:
    """One HTTP exchange: status, case-insensitive headers and raw body.

    Owned by the connection for the duration of a single call; resource
    clients only ever see the decoded value.
    """

    status_code: int
    headers: httpx.Headers
    body: bytes = b""
    url: str | None = None

    @classmethod
    def from_response(cls, response: httpx.Response, url: str | None = None) -> "Envelope":
        return cls(
            status_code=response.status_code,
            headers=httpx.Headers(response.headers),
            body=response.content or b"",
            url=url,
        )

    @property
    def content_type(self) -> str | None:
        value = self.headers.get("Content-Type")
        if not value:
            return None
        return value.split(";", 1)[0].strip().lower()

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def api_info(self) -> ApiInfo:
        return ApiInfo.from_headers(self.headers)
