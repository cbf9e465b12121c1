"""Argument guards for client methods.

Checks run synchronously before any network call so misuse never reaches
the transport.
"""

from typing import Any

from .exceptions import ArgumentInvalidError

__all__ = [
    "ensure_argument_not_none",
    "ensure_argument_not_none_or_empty",
    "ensure_positive",
]


def ensure_argument_not_none(value: Any, name: str) -> None:
    """Raise ArgumentInvalidError when value is None."""
    if value is None:
        raise ArgumentInvalidError(name)


def ensure_argument_not_none_or_empty(value: str | None, name: str) -> None:
    """Raise ArgumentInvalidError when a string argument is None or blank."""
    if value is None or not value.strip():
        raise ArgumentInvalidError(name, f"Argument '{name}' must not be empty")


def ensure_positive(value: int | None, name: str) -> None:
    """Raise ArgumentInvalidError when an optional integer is present but < 1."""
    if value is not None and value < 1:
        raise ArgumentInvalidError(
            name, f"Argument '{name}' must be a positive integer, got {value}"
        )
