"""Configuration management with pydantic-settings for ghe-client.

- Automatic .env file loading with proper precedence
- Validation with clear error messages
- GHE_ environment variable prefix
- SecretStr for the API token
- Frozen config (thread-safe, immutable after load)
"""

import logging
from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .__version__ import __version__

logger = logging.getLogger("ghe_client.config")

__all__ = [
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "get_config",
    "reset_config",
]

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_API_VERSION = "2022-11-28"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ClientConfig(BaseSettings):
    """Configuration for the GitHub Enterprise API client.

    Loads from (in order of precedence):
    1. Environment variables (highest priority, GHE_ prefix)
    2. .env file in the working directory
    3. Default values (lowest priority)

    Attributes:
        base_url: API root, e.g. https://ghe.example.com/api/v3
        token: Personal access token (SecretStr, empty means anonymous)
        api_version: Value sent as X-GitHub-Api-Version
        user_agent: Value sent as User-Agent
        connect_timeout: Connection establishment timeout (seconds)
        read_timeout: Read timeout for API responses (seconds)
        write_timeout: Write timeout for request bodies (seconds)
        pool_timeout: Connection pool acquisition timeout (seconds)
        default_page_size: per_page used when a PageRequest has no page_size
        max_retries: Retries for safe (GET/HEAD) requests; 0 disables retry
        cache_max_entries: Bound for the memoization cache; None is unbounded
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Log format (json for production, text for development)
    """

    model_config = SettingsConfigDict(
        env_prefix="GHE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        validate_default=True,
        frozen=True,
        extra="ignore",
    )

    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="API root URL. For GitHub Enterprise Server: https://<host>/api/v3",
    )
    token: SecretStr = Field(
        default=SecretStr(""),
        description="Personal access token; empty for anonymous access",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        description="REST API version header value",
    )
    user_agent: str = Field(
        default=f"ghe-client/{__version__}",
        min_length=1,
        description="User-Agent header value (required by the API)",
    )

    connect_timeout: float = Field(default=5.0, gt=0)
    read_timeout: float = Field(default=30.0, gt=0)
    write_timeout: float = Field(default=5.0, gt=0)
    pool_timeout: float = Field(default=5.0, gt=0)

    default_page_size: int | None = Field(
        default=None,
        ge=1,
        le=100,
        description="per_page for paged requests without an explicit page size (server default when unset)",
    )
    max_retries: int = Field(
        default=0,
        ge=0,
        le=10,
        description="Retries for safe requests on server/transport/rate-limit errors",
    )
    cache_max_entries: int | None = Field(
        default=None,
        ge=1,
        description="Maximum memoization cache entries (None = unbounded)",
    )

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    @field_validator("base_url")
    @classmethod
    def normalize_base_url(cls, v: str) -> str:
        """Require an http(s) URL and strip trailing slashes."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"base_url must start with http:// or https://, got '{v}'")
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}, got '{v}'")
        return upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        lower = v.lower()
        if lower not in ("json", "text"):
            raise ValueError(f"log_format must be 'json' or 'text', got '{v}'")
        return lower


@lru_cache(maxsize=1)
def get_config() -> ClientConfig:
    """Get global configuration singleton.

    First call loads from environment + .env file, subsequent calls return
    the cached instance.

    Returns:
        ClientConfig singleton instance.

    Raises:
        ValidationError: If configuration values are invalid.
    """
    return ClientConfig()


def reset_config() -> None:
    """Reset configuration singleton for testing."""
    get_config.cache_clear()
