"""Credential suppliers.

The connection asks its store for a token on every request, so rotated
tokens are picked up without rebuilding the client.
"""

from typing import Protocol, runtime_checkable

from pydantic import SecretStr

__all__ = ["AnonymousCredentialStore", "CredentialStore", "InMemoryCredentialStore"]


@runtime_checkable
class CredentialStore(Protocol):
    """Anything that can hand out the current API token."""

    def get_token(self) -> str | None:
        """Return the bearer token, or None for anonymous requests."""
        ...


class InMemoryCredentialStore:
    """Holds a single static token."""

    def __init__(self, token: str | SecretStr) -> None:
        if isinstance(token, str):
            token = SecretStr(token)
        self._token = token

    def get_token(self) -> str | None:
        return self._token.get_secret_value() or None

    def __repr__(self) -> str:
        return "InMemoryCredentialStore(token='**********')"


class AnonymousCredentialStore:
    """Sends no Authorization header."""

    def get_token(self) -> str | None:
        return None
