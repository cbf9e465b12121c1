"""Request pipeline shared by every resource client.

One logical call = one HTTP exchange:
1. Build headers: auth from the credential store, per-call Accept (preview
   media types pass through untouched), API version, User-Agent
2. Send through the httpx transport (no retry at this layer)
3. 2xx: decode into the declared response type
4. non-2xx: classify into an ApiError and raise it
5. transport failure: raise TransportError

Reference: https://docs.github.com/en/rest
"""

import logging
import time
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, TypeVar

import httpx

from .. import metrics
from ..config import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from ..credentials import AnonymousCredentialStore, CredentialStore
from ..exceptions import ArgumentInvalidError
from ..timing import timed_operation
from ..validation import ensure_argument_not_none_or_empty, ensure_positive
from .cache import MemoCache
from .classifier import classify_response, classify_transport_error
from .codec import ResponseCodec
from .envelope import ApiInfo, Envelope
from .pagination import ApiPagination, Page, PageRequest, parse_next_link

logger = logging.getLogger("ghe_client.connection")

__all__ = ["ApiConnection", "DEFAULT_ACCEPT"]

T = TypeVar("T")

DEFAULT_ACCEPT = "application/vnd.github+json"


class ApiConnection:
    """Typed request/response pipeline over an httpx.AsyncClient.

    Uses a long-lived httpx.AsyncClient with connection pooling. Safe to share
    between concurrent tasks: the only shared mutable state is the
    memoization cache and the informational last_api_info.

    Attributes:
        base_url: API root (e.g. https://ghe.example.com/api/v3)
        credentials: Credential store consulted on every request
        cache: Memoization cache (type adapters, header sets)
        codec: Request/response codec
        pagination: Pagination engine used by get_all()
        default_page_size: per_page for get_all() calls without a page_size

    Example:
        >>> async with ApiConnection("https://ghe.example.com/api/v3",
        ...                          InMemoryCredentialStore("ghp_token")) as conn:
        ...     hooks = await conn.get_all("admin/pre-receive-hooks", PreReceiveHook,
        ...                                accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW)
    """

    # Timeout configuration
    CONNECT_TIMEOUT = 5.0  # seconds
    READ_TIMEOUT = 30.0  # seconds
    WRITE_TIMEOUT = 5.0  # seconds
    POOL_TIMEOUT = 5.0  # seconds

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        credentials: CredentialStore | None = None,
        *,
        api_version: str = DEFAULT_API_VERSION,
        user_agent: str = "ghe-client",
        timeout: httpx.Timeout | None = None,
        default_page_size: int | None = None,
        cache: MemoCache | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the connection.

        Args:
            base_url: API root URL
            credentials: Token supplier (anonymous when None)
            api_version: X-GitHub-Api-Version header value
            user_agent: User-Agent header value
            timeout: httpx timeout; defaults to the class timeout constants
            default_page_size: per_page used when a PageRequest has none
            cache: Shared memoization cache; a private one is created if None
            http_client: Pre-built httpx.AsyncClient (not closed by close())
            transport: httpx transport for the internally built client
                (e.g. httpx.MockTransport in tests)
        """
        ensure_argument_not_none_or_empty(base_url, "base_url")
        ensure_positive(default_page_size, "default_page_size")

        self.base_url = base_url.rstrip("/")
        self.credentials: CredentialStore = credentials or AnonymousCredentialStore()
        self.api_version = api_version
        self.user_agent = user_agent
        self.default_page_size = default_page_size
        self.cache = cache if cache is not None else MemoCache()
        self.codec = ResponseCodec(self.cache)
        self.pagination = ApiPagination()
        self._last_api_info: ApiInfo | None = None

        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout
            or httpx.Timeout(
                connect=self.CONNECT_TIMEOUT,
                read=self.READ_TIMEOUT,
                write=self.WRITE_TIMEOUT,
                pool=self.POOL_TIMEOUT,
            ),
            follow_redirects=True,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiConnection":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit -- close httpx client."""
        await self.close()

    async def close(self) -> None:
        """Close the httpx client if this connection created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def last_api_info(self) -> ApiInfo | None:
        """Rate limit, links and scopes from the most recent response."""
        return self._last_api_info

    # --- Request building ---

    def _resolve_url(self, path: str) -> str:
        """Turn a resource path or absolute API URL into an absolute URL.

        Raises:
            ArgumentInvalidError: If path is empty or an absolute URL outside base_url
        """
        ensure_argument_not_none_or_empty(path, "path")
        if path.startswith(("http://", "https://")):
            if path != self.base_url and not path.startswith(self.base_url + "/"):
                raise ArgumentInvalidError(
                    "path", f"URL '{path[:100]}' is not under base URL '{self.base_url}'"
                )
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def _static_headers(self, accept: str) -> Mapping[str, str]:
        return self.cache.get_or_compute(
            ("headers", self.user_agent, self.api_version, accept),
            lambda: MappingProxyType(
                {
                    "Accept": accept,
                    "X-GitHub-Api-Version": self.api_version,
                    "User-Agent": self.user_agent,
                }
            ),
        )

    def _build_headers(
        self,
        accept: str | None,
        has_body: bool,
        extra_headers: Mapping[str, str] | None,
    ) -> dict[str, str]:
        headers = dict(self._static_headers(accept or DEFAULT_ACCEPT))
        token = self.credentials.get_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        if has_body:
            headers["Content-Type"] = "application/json; charset=utf-8"
        if extra_headers:
            headers.update(extra_headers)
        return headers

    # --- Core pipeline ---

    async def execute(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: Any = None,
        accept: str | None = None,
        extra_headers: Mapping[str, str] | None = None,
    ) -> Envelope:
        """Perform exactly one HTTP exchange.

        Args:
            method: HTTP method (GET, POST, PATCH, PUT, DELETE)
            path: Resource path relative to base_url, or an absolute API URL
            params: Query parameters
            body: Request payload (see ResponseCodec.serialize)
            accept: Accept header for this call; API default when None
            extra_headers: Additional headers (override built ones)

        Returns:
            Envelope of a 2xx exchange

        Raises:
            ArgumentInvalidError: Bad method/path, before any I/O
            CodecError: Body cannot be serialized, before any I/O
            ApiError: Classified non-2xx outcome or transport failure
        """
        ensure_argument_not_none_or_empty(method, "method")
        method = method.upper()
        url = self._resolve_url(path)
        content = self.codec.serialize(body)
        headers = self._build_headers(accept, content is not None, extra_headers)
        request_url = str(httpx.URL(url).copy_merge_params(dict(params))) if params else url

        with timed_operation(
            "api_request", logger, extra={"method": method, "url": request_url}
        ) as log_context:
            start = time.perf_counter()
            try:
                response = await self._client.request(
                    method,
                    url,
                    params=dict(params) if params else None,
                    content=content,
                    headers=headers,
                )
            except httpx.HTTPError as e:
                metrics.requests_total.labels(method=method, status="transport_error").inc()
                error = classify_transport_error(e)
                metrics.api_errors_total.labels(kind=error.kind.value).inc()
                raise error from e
            finally:
                metrics.request_duration_seconds.labels(method=method).observe(
                    time.perf_counter() - start
                )

            envelope = Envelope.from_response(response, request_url)
            log_context["status_code"] = envelope.status_code
            metrics.requests_total.labels(
                method=method, status=str(envelope.status_code)
            ).inc()
            self._last_api_info = envelope.api_info

            if not envelope.is_success:
                error = classify_response(envelope.status_code, envelope.headers, envelope.body)
                metrics.api_errors_total.labels(kind=error.kind.value).inc()
                raise error

        return envelope

    # --- Typed verbs used by resource clients ---

    async def get(
        self,
        path: str,
        response_type: type[T] | Any,
        params: Mapping[str, str] | None = None,
        accept: str | None = None,
    ) -> T:
        """GET a single entity and decode it."""
        envelope = await self.execute("GET", path, params=params, accept=accept)
        return self.codec.deserialize(envelope, response_type)

    async def get_page(
        self,
        path: str,
        item_type: type[T],
        params: Mapping[str, str] | None = None,
        accept: str | None = None,
    ) -> Page[T]:
        """GET one page of a collection; the page knows how to fetch its successor."""
        envelope = await self.execute("GET", path, params=params, accept=accept)
        items = self.codec.deserialize(envelope, list[item_type])

        async def fetch_next(link: str) -> Page[T]:
            # Query parameters are embedded in the Link URL
            return await self.get_page(link, item_type, None, accept)

        return Page(
            items=tuple(items),
            next_page_link=parse_next_link(envelope.headers.get("Link"), self.base_url),
            url=envelope.url,
            fetch_next=fetch_next,
        )

    async def get_all(
        self,
        path: str,
        item_type: type[T],
        params: Mapping[str, str] | None = None,
        accept: str | None = None,
        options: PageRequest | None = None,
    ) -> list[T]:
        """GET every requested page of a collection as one list.

        Args:
            path: Collection path
            item_type: Type of each item
            params: Extra query parameters for the first page
            accept: Accept header for every page
            options: Page budget (page_size, page_count, start_page)

        Returns:
            Items in page order; empty if start_page is past the last page
        """
        options = options or PageRequest.none()
        first_params = {**(params or {}), **options.to_params(self.default_page_size)}
        return await self.pagination.get_all_pages(
            lambda: self.get_page(path, item_type, first_params or None, accept),
            options,
        )

    async def post(
        self,
        path: str,
        data: Any,
        response_type: type[T] | Any = None,
        accept: str | None = None,
    ) -> T | None:
        """POST data and decode the response (None when response_type is None)."""
        envelope = await self.execute("POST", path, body=data, accept=accept)
        return self.codec.deserialize(envelope, response_type)

    async def patch(
        self,
        path: str,
        data: Any,
        response_type: type[T] | Any = None,
        accept: str | None = None,
    ) -> T | None:
        """PATCH data and decode the response."""
        envelope = await self.execute("PATCH", path, body=data, accept=accept)
        return self.codec.deserialize(envelope, response_type)

    async def put(
        self,
        path: str,
        data: Any = None,
        response_type: type[T] | Any = None,
        accept: str | None = None,
    ) -> T | None:
        """PUT data and decode the response."""
        envelope = await self.execute("PUT", path, body=data, accept=accept)
        return self.codec.deserialize(envelope, response_type)

    async def delete(
        self,
        path: str,
        data: Any = None,
        accept: str | None = None,
    ) -> None:
        """DELETE a resource. Success carries no value."""
        await self.execute("DELETE", path, body=data, accept=accept)

