"""Resource clients for the GitHub Enterprise admin APIs."""

from .base import ApiClient
from .endpoints import AcceptHeaders, ApiUrls
from .enterprise import EnterpriseClient
from .pre_receive_environments import EnterprisePreReceiveEnvironmentsClient
from .pre_receive_hooks import EnterprisePreReceiveHooksClient

__all__ = [
    "AcceptHeaders",
    "ApiClient",
    "ApiUrls",
    "EnterpriseClient",
    "EnterprisePreReceiveEnvironmentsClient",
    "EnterprisePreReceiveHooksClient",
]
