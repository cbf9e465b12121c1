"""Enterprise admin client for pre-receive environments.

Reference: https://docs.github.com/en/enterprise-server/rest/enterprise-admin/pre-receive-environments
"""

import logging

from ..http.pagination import ApiOptions
from ..models.pre_receive import (
    NewPreReceiveEnvironment,
    PreReceiveEnvironment,
    PreReceiveEnvironmentDownload,
    UpdatePreReceiveEnvironment,
)
from ..validation import ensure_argument_not_none
from .base import ApiClient
from .endpoints import AcceptHeaders, ApiUrls

logger = logging.getLogger("ghe_client.pre_receive_environments")

__all__ = ["EnterprisePreReceiveEnvironmentsClient"]


class EnterprisePreReceiveEnvironmentsClient(ApiClient):
    """CRUD for pre-receive environments plus image download control."""

    async def get_all(self, options: ApiOptions | None = None) -> list[PreReceiveEnvironment]:
        """List environments (the built-in default environment included)."""
        return await self.connection.get_all(
            ApiUrls.admin_pre_receive_environments(),
            PreReceiveEnvironment,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
            options=options or ApiOptions.none(),
        )

    async def get(self, environment_id: int) -> PreReceiveEnvironment:
        return await self.connection.get(
            ApiUrls.admin_pre_receive_environments(environment_id),
            PreReceiveEnvironment,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )

    async def create(self, new_environment: NewPreReceiveEnvironment) -> PreReceiveEnvironment:
        """Create an environment from an image tarball URL.

        The server starts downloading the image right away; poll
        download_status() to follow it.
        """
        ensure_argument_not_none(new_environment, "new_environment")
        environment = await self.connection.post(
            ApiUrls.admin_pre_receive_environments(),
            new_environment,
            PreReceiveEnvironment,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )
        logger.info(
            "pre_receive_environment_created",
            extra={"environment_id": environment.id, "environment_name": environment.name},
        )
        return environment

    async def edit(
        self, environment_id: int, update_environment: UpdatePreReceiveEnvironment
    ) -> PreReceiveEnvironment:
        """Update an environment. The default environment cannot be edited (422)."""
        ensure_argument_not_none(update_environment, "update_environment")
        return await self.connection.patch(
            ApiUrls.admin_pre_receive_environments(environment_id),
            update_environment,
            PreReceiveEnvironment,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )

    async def delete(self, environment_id: int) -> None:
        """Delete an environment. Fails with 422 while hooks still use it."""
        await self.connection.delete(
            ApiUrls.admin_pre_receive_environments(environment_id),
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )
        logger.info("pre_receive_environment_deleted", extra={"environment_id": environment_id})

    async def download_status(self, environment_id: int) -> PreReceiveEnvironmentDownload:
        """State of the environment's latest image download."""
        return await self.connection.get(
            ApiUrls.admin_pre_receive_environment_download_status(environment_id),
            PreReceiveEnvironmentDownload,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )

    async def trigger_download(self, environment_id: int) -> PreReceiveEnvironmentDownload:
        """Start a new download of the environment's image tarball."""
        download = await self.connection.post(
            ApiUrls.admin_pre_receive_environment_download(environment_id),
            None,
            PreReceiveEnvironmentDownload,
            accept=AcceptHeaders.PRE_RECEIVE_ENVIRONMENTS_PREVIEW,
        )
        logger.info(
            "pre_receive_environment_download_triggered",
            extra={"environment_id": environment_id, "state": download.state.value},
        )
        return download
