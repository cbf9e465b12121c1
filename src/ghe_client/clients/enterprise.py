"""Entry point for the GitHub Enterprise admin APIs."""

from ..http.connection import ApiConnection
from .base import ApiClient
from .pre_receive_environments import EnterprisePreReceiveEnvironmentsClient
from .pre_receive_hooks import EnterprisePreReceiveHooksClient

__all__ = ["EnterpriseClient"]


class EnterpriseClient(ApiClient):
    """Groups the enterprise admin resource clients over one connection."""

    def __init__(self, connection: ApiConnection) -> None:
        super().__init__(connection)
        self.pre_receive_hooks = EnterprisePreReceiveHooksClient(connection)
        self.pre_receive_environments = EnterprisePreReceiveEnvironmentsClient(connection)
