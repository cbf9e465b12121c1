"""Timing utilities for structured logging.

Uses time.perf_counter() for sub-millisecond precision timing.
"""

import logging
import time
from contextlib import contextmanager
from typing import Optional


@contextmanager
def timed_operation(
    operation: str,
    logger: logging.Logger,
    level: int = logging.DEBUG,
    extra: Optional[dict] = None,
):
    """Context manager for timing operations with structured logging.

    - Captures start time on entry using time.perf_counter()
    - Logs duration on exit (success or failure)
    - Re-raises exceptions after logging

    Args:
        operation: Operation name (used in log message as {operation}_completed)
        logger: Logger instance to use for logging
        level: Log level for success case (default: DEBUG)
        extra: Optional dict of extra context to include in log. The dict is
            yielded to the body, which may add keys (e.g. status_code) that
            end up in the completion record.

    Yields:
        The mutable context dict

    Example:
        >>> logger = logging.getLogger("ghe_client.connection")
        >>> with timed_operation("api_request", logger, extra={"path": "/user"}) as ctx:
        ...     ctx["status_code"] = 200

    Logs on success:
        {"message": "api_request_completed",
         "context": {"path": "/user", "status_code": 200, "duration_ms": 45.2, "status": "success"}}

    Logs on failure:
        {"message": "api_request_failed",
         "context": {"path": "/user", "duration_ms": 12.0, "status": "failed",
                     "error": "...", "error_type": "NotFoundError"}}
    """
    start = time.perf_counter()
    context = dict(extra or {})

    try:
        yield context

        duration_ms = (time.perf_counter() - start) * 1000
        logger.log(
            level,
            f"{operation}_completed",
            extra={
                **context,
                "duration_ms": round(duration_ms, 2),
                "status": "success",
            },
        )

    except Exception as e:
        duration_ms = (time.perf_counter() - start) * 1000
        logger.warning(
            f"{operation}_failed",
            extra={
                **context,
                "duration_ms": round(duration_ms, 2),
                "status": "failed",
                "error": str(e),
                "error_type": type(e).__name__,
            },
        )
        raise
