"""Base class for resource clients."""

from ..exceptions import ArgumentInvalidError
from ..http.connection import ApiConnection

__all__ = ["ApiClient"]


class ApiClient:
    """A resource client bound to one shared ApiConnection.

    Resource clients hold no state of their own; every call goes straight
    through the connection.
    """

    def __init__(self, connection: ApiConnection) -> None:
        if connection is None:
            raise ArgumentInvalidError("connection", "connection must not be None")
        self.connection = connection
