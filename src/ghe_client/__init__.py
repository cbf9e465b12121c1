"""ghe-client - Typed async client for the GitHub Enterprise Server REST API.

Provides:
- Request pipeline over httpx with per-call Accept headers (preview media types)
- Link-header pagination with page size / page count / start page budgets
- Typed error classification (NotFound, validation, rate limit, ...)
- Concurrency-safe memoization cache
- Enterprise admin clients for pre-receive hooks and environments

Python Version: 3.10+ required
"""

# Logging Configuration - Configure before other imports
from .logging_config import StructuredFormatter, configure_logging

# Initialize structured logging on module import
configure_logging()

from .__version__ import __version__
from .client import GitHubClient
from .clients import (
    AcceptHeaders,
    ApiUrls,
    EnterpriseClient,
    EnterprisePreReceiveEnvironmentsClient,
    EnterprisePreReceiveHooksClient,
)

# Configuration
from .config import ClientConfig, get_config, reset_config
from .credentials import AnonymousCredentialStore, CredentialStore, InMemoryCredentialStore

# Errors
from .exceptions import (
    ApiError,
    ApiValidationError,
    ArgumentInvalidError,
    AuthorizationError,
    CodecError,
    ErrorKind,
    ForbiddenError,
    GitHubClientError,
    NotFoundError,
    RateLimitExceeded,
    ServerError,
    TransportError,
)

# HTTP core
from .http import (
    ApiConnection,
    ApiInfo,
    ApiOptions,
    ApiPagination,
    MemoCache,
    Page,
    PageRequest,
    RetryingConnection,
)

# Models
from .models import (
    NewPreReceiveEnvironment,
    NewPreReceiveHook,
    PreReceiveEnvironment,
    PreReceiveEnvironmentDownload,
    PreReceiveEnvironmentDownloadState,
    PreReceiveHook,
    PreReceiveHookEnforcement,
    UpdatePreReceiveEnvironment,
    UpdatePreReceiveHook,
)
from .timing import timed_operation

# Submodule exports for test mocking compatibility
# patch("ghe_client.metrics.requests_total") style mocking
from . import metrics

__all__ = [
    "__version__",
    # Client
    "GitHubClient",
    "EnterpriseClient",
    "EnterprisePreReceiveHooksClient",
    "EnterprisePreReceiveEnvironmentsClient",
    "AcceptHeaders",
    "ApiUrls",
    # Configuration
    "ClientConfig",
    "get_config",
    "reset_config",
    "CredentialStore",
    "InMemoryCredentialStore",
    "AnonymousCredentialStore",
    # Errors
    "ErrorKind",
    "GitHubClientError",
    "ArgumentInvalidError",
    "CodecError",
    "ApiError",
    "NotFoundError",
    "ApiValidationError",
    "RateLimitExceeded",
    "AuthorizationError",
    "ForbiddenError",
    "ServerError",
    "TransportError",
    # HTTP core
    "ApiConnection",
    "RetryingConnection",
    "ApiInfo",
    "ApiOptions",
    "ApiPagination",
    "MemoCache",
    "Page",
    "PageRequest",
    # Models
    "PreReceiveHook",
    "NewPreReceiveHook",
    "UpdatePreReceiveHook",
    "PreReceiveHookEnforcement",
    "PreReceiveEnvironment",
    "NewPreReceiveEnvironment",
    "UpdatePreReceiveEnvironment",
    "PreReceiveEnvironmentDownload",
    "PreReceiveEnvironmentDownloadState",
    # Logging
    "configure_logging",
    "StructuredFormatter",
    "timed_operation",
]
