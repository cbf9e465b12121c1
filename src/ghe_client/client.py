"""Top-level client for a GitHub Enterprise Server instance.

Owns one ApiConnection and hands it to every resource client.
"""

import logging
from typing import Any

import httpx

from .config import DEFAULT_BASE_URL, ClientConfig, get_config
from .credentials import AnonymousCredentialStore, CredentialStore, InMemoryCredentialStore
from .http.cache import MemoCache
from .http.connection import ApiConnection
from .http.retry import RetryingConnection
from .logging_config import configure_logging
from .clients.enterprise import EnterpriseClient

logger = logging.getLogger("ghe_client.client")

__all__ = ["GitHubClient"]


class GitHubClient:
    """Entry point: GitHubClient(...).enterprise.pre_receive_hooks.get_all().

    Example:
        >>> async with GitHubClient.from_config() as github:
        ...     for hook in await github.enterprise.pre_receive_hooks.get_all():
        ...         print(hook.id, hook.name, hook.enforcement)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        credentials: CredentialStore | None = None,
        *,
        connection: ApiConnection | None = None,
        **connection_kwargs: Any,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root URL (ignored when connection is given)
            credentials: Token supplier (ignored when connection is given)
            connection: Pre-built connection to share
            **connection_kwargs: Passed to ApiConnection
        """
        self.connection = connection or ApiConnection(
            base_url, credentials, **connection_kwargs
        )
        self.enterprise = EnterpriseClient(self.connection)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "GitHubClient":
        """Build a client from ClientConfig (GHE_* environment variables).

        Retries are enabled when config.max_retries > 0. Logging is
        reconfigured from config.log_level and config.log_format.
        """
        config = config or get_config()
        configure_logging(config.log_level, config.log_format)
        token = config.token.get_secret_value()
        credentials: CredentialStore = (
            InMemoryCredentialStore(config.token) if token else AnonymousCredentialStore()
        )
        kwargs: dict[str, Any] = dict(
            api_version=config.api_version,
            user_agent=config.user_agent,
            timeout=httpx.Timeout(
                connect=config.connect_timeout,
                read=config.read_timeout,
                write=config.write_timeout,
                pool=config.pool_timeout,
            ),
            default_page_size=config.default_page_size,
            cache=MemoCache(config.cache_max_entries),
            transport=transport,
        )
        if config.max_retries > 0:
            connection: ApiConnection = RetryingConnection(
                config.base_url, credentials, max_retries=config.max_retries, **kwargs
            )
        else:
            connection = ApiConnection(config.base_url, credentials, **kwargs)

        logger.debug(
            "client_configured",
            extra={
                "base_url": config.base_url,
                "authenticated": bool(token),
                "max_retries": config.max_retries,
            },
        )
        return cls(connection=connection)

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.connection.close()
