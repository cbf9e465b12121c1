"""Opt-in retry layer for safe requests.

ApiConnection performs exactly one exchange per call. RetryingConnection
wraps execute() for GET/HEAD/OPTIONS only; writes are never retried because
a lost response does not tell us whether the server applied them.

Retried outcomes:
- ServerError with a 5xx status: exponential backoff min(60, 2^attempt) + jitter
- TransportError (timeouts, connection resets): same backoff
- RateLimitExceeded: wait until reset_at (capped at max_backoff)
"""

import asyncio
import logging
import random
from datetime import datetime, timezone
from typing import Any

from .. import metrics
from ..exceptions import ApiError, RateLimitExceeded, ServerError, TransportError
from .connection import ApiConnection
from .envelope import Envelope

logger = logging.getLogger("ghe_client.retry")

__all__ = ["RetryingConnection"]


class RetryingConnection(ApiConnection):
    """ApiConnection that retries idempotent requests on transient failures."""

    SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})

    # Retry configuration
    MAX_RETRIES = 3
    BASE_BACKOFF = 2  # seconds, exponential: min(60, 2^attempt)
    MAX_BACKOFF = 60  # seconds

    def __init__(
        self,
        *args: Any,
        max_retries: int = MAX_RETRIES,
        base_backoff: float = BASE_BACKOFF,
        max_backoff: float = MAX_BACKOFF,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.max_retries = max_retries
        self.base_backoff = base_backoff
        self.max_backoff = max_backoff

    @staticmethod
    def _is_retryable(error: ApiError) -> bool:
        if isinstance(error, (TransportError, RateLimitExceeded)):
            return True
        return isinstance(error, ServerError) and (error.status_code or 0) >= 500

    def _delay_for(self, error: ApiError, attempt: int) -> float:
        if isinstance(error, RateLimitExceeded) and error.reset_at is not None:
            wait = (error.reset_at - datetime.now(timezone.utc)).total_seconds()
            return min(max(1.0, wait), self.max_backoff)
        backoff = min(self.max_backoff, self.base_backoff ** (attempt + 1))
        return backoff + random.uniform(0, 1)  # jitter

    async def execute(self, method: str, path: str, **kwargs: Any) -> Envelope:
        if not method or method.upper() not in self.SAFE_METHODS or self.max_retries <= 0:
            return await super().execute(method, path, **kwargs)

        for attempt in range(self.max_retries + 1):
            try:
                return await super().execute(method, path, **kwargs)
            except ApiError as e:
                if attempt >= self.max_retries or not self._is_retryable(e):
                    raise
                delay = self._delay_for(e, attempt)
                metrics.retries_total.labels(kind=e.kind.value).inc()
                logger.warning(
                    "request_retry",
                    extra={
                        "method": method.upper(),
                        "path": path,
                        "error_kind": e.kind.value,
                        "status_code": e.status_code,
                        "delay_seconds": round(delay, 2),
                        "attempt": attempt + 1,
                        "max_retries": self.max_retries,
                    },
                )
                await asyncio.sleep(delay)

        # Should not reach here: the last attempt either returns or raises
        raise RuntimeError("retry loop exited without a result")
