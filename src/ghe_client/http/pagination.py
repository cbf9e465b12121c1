"""Pagination engine: assembles link-driven pages into one ordered list.

Follows GitHub's Link header pagination pattern:
- page_size becomes per_page, start_page becomes page on the first request
- every later page is fetched from the previous page's rel="next" URL
- stop when there is no next link or the page budget (page_count) is spent

Pages are fetched strictly one after another. The URL of page N+1 is only
known once page N has arrived, so there is no prefetching. Any failure aborts
the whole call; callers never see a partial list.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .. import metrics
from ..validation import ensure_positive
from .envelope import parse_link_header

logger = logging.getLogger("ghe_client.pagination")

__all__ = ["ApiOptions", "ApiPagination", "Page", "PageRequest", "parse_next_link"]

T = TypeVar("T")


@dataclass(frozen=True)
class PageRequest:
    """How much of a collection to fetch.

    All fields absent means every page at the server's default page size.

    Attributes:
        page_size: Items per page (sent as per_page; the server may return fewer)
        page_count: Maximum number of pages to fetch
        start_page: 1-based page to start from (sent as page)
    """

    page_size: int | None = None
    page_count: int | None = None
    start_page: int | None = None

    def __post_init__(self) -> None:
        ensure_positive(self.page_size, "page_size")
        ensure_positive(self.page_count, "page_count")
        ensure_positive(self.start_page, "start_page")

    @classmethod
    def none(cls) -> "PageRequest":
        """Fetch everything with default page size."""
        return cls()

    @property
    def effective_start_page(self) -> int:
        return self.start_page or 1

    def to_params(self, default_page_size: int | None = None) -> dict[str, str]:
        """Query parameters for the first page request."""
        params: dict[str, str] = {}
        page_size = self.page_size or default_page_size
        if page_size is not None:
            params["per_page"] = str(page_size)
        if self.start_page is not None:
            params["page"] = str(self.start_page)
        return params


# Name used throughout the resource clients
ApiOptions = PageRequest


@dataclass(frozen=True)
class Page(Generic[T]):
    """One server-returned batch plus its continuation.

    Attributes:
        items: Items of this page in server order
        next_page_link: Absolute URL of the next page, None on the last page
        url: URL this page was fetched from, when known
    """

    items: tuple[T, ...]
    next_page_link: str | None = None
    url: str | None = None
    fetch_next: Callable[[str], Awaitable["Page[T]"]] | None = field(
        default=None, repr=False, compare=False
    )

    async def get_next_page(self) -> "Page[T] | None":
        """Fetch the page behind next_page_link, or None on the last page."""
        if not self.next_page_link or self.fetch_next is None:
            return None
        return await self.fetch_next(self.next_page_link)


def parse_next_link(link_header: str | None, base_url: str) -> str | None:
    """Extract the rel="next" URL from a Link header.

    Args:
        link_header: Raw Link header value
        base_url: API root the link must live under

    Returns:
        Next page URL or None if there is no next page
    """
    url = parse_link_header(link_header).get("next")
    if url is None:
        return None
    # Reject pagination URLs outside our API root (open redirect / SSRF via
    # a crafted Link header)
    if not url.startswith(base_url.rstrip("/") + "/"):
        logger.warning(
            "pagination_link_rejected",
            extra={"url": url[:100], "base_url": base_url},
        )
        return None
    return url


class ApiPagination:
    """Collects every page of a collection into a single list."""

    async def get_all_pages(
        self,
        get_first_page: Callable[[], Awaitable[Page[T]]],
        page_request: PageRequest | None = None,
    ) -> list[T]:
        """Fetch pages sequentially and concatenate their items.

        Args:
            get_first_page: Fetches the first requested page; page_size and
                start_page must already be applied by the caller
            page_request: Page budget; only page_count is consulted here

        Returns:
            Items of all fetched pages, page order then intra-page order.
            A start_page past the last page yields an empty list.

        Raises:
            ApiError: From any page fetch; no partial result is returned
        """
        page_request = page_request or PageRequest.none()
        page_count = page_request.page_count

        items: list[T] = []
        visited: set[str] = set()

        page = await get_first_page()
        pages_fetched = 1

        while True:
            if page.url:
                visited.add(page.url)
            items.extend(page.items)
            metrics.pages_fetched_total.inc()
            logger.debug(
                "pagination_page_fetched",
                extra={
                    "page": page_request.effective_start_page + pages_fetched - 1,
                    "page_items": len(page.items),
                    "total_so_far": len(items),
                },
            )

            next_link = page.next_page_link
            if not next_link:
                break
            if page_count is not None and pages_fetched >= page_count:
                break
            if next_link in visited:
                logger.warning(
                    "pagination_link_repeated",
                    extra={"url": next_link[:100], "pages_fetched": pages_fetched},
                )
                break

            visited.add(next_link)
            next_page = await page.get_next_page()
            if next_page is None:
                break
            page = next_page
            pages_fetched += 1

        logger.debug(
            "pagination_complete",
            extra={"pages_fetched": pages_fetched, "total_items": len(items)},
        )
        return items
