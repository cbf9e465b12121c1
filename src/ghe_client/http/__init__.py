"""HTTP core: request pipeline, pagination, error classification, memoization."""

from .cache import MemoCache
from .classifier import classify_response, classify_transport_error
from .codec import ResponseCodec
from .connection import DEFAULT_ACCEPT, ApiConnection
from .envelope import ApiInfo, Envelope, RateLimit, parse_link_header
from .pagination import ApiOptions, ApiPagination, Page, PageRequest, parse_next_link
from .retry import RetryingConnection

__all__ = [
    "DEFAULT_ACCEPT",
    "ApiConnection",
    "ApiInfo",
    "ApiOptions",
    "ApiPagination",
    "Envelope",
    "MemoCache",
    "Page",
    "PageRequest",
    "RateLimit",
    "ResponseCodec",
    "RetryingConnection",
    "classify_response",
    "classify_transport_error",
    "parse_link_header",
    "parse_next_link",
]
