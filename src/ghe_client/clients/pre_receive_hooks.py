"""Enterprise admin client for pre-receive hooks.

Every call sends the pre-receive hooks preview media type.

Reference: https://docs.github.com/en/enterprise-server/rest/enterprise-admin/pre-receive-hooks
"""

import logging

from ..http.pagination import ApiOptions
from ..models.pre_receive import NewPreReceiveHook, PreReceiveHook, UpdatePreReceiveHook
from ..validation import ensure_argument_not_none
from .base import ApiClient
from .endpoints import AcceptHeaders, ApiUrls

logger = logging.getLogger("ghe_client.pre_receive_hooks")

__all__ = ["EnterprisePreReceiveHooksClient"]


class EnterprisePreReceiveHooksClient(ApiClient):
    """CRUD for site-wide pre-receive hooks.

    Example:
        >>> hooks = await github.enterprise.pre_receive_hooks.get_all(
        ...     ApiOptions(page_size=10, page_count=1)
        ... )
    """

    async def get_all(self, options: ApiOptions | None = None) -> list[PreReceiveHook]:
        """List pre-receive hooks.

        Args:
            options: Page size / count / start page; all pages when None

        Returns:
            Hooks in server order
        """
        hooks = await self.connection.get_all(
            ApiUrls.admin_pre_receive_hooks(),
            PreReceiveHook,
            accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW,
            options=options or ApiOptions.none(),
        )
        logger.debug("pre_receive_hooks_listed", extra={"count": len(hooks)})
        return hooks

    async def get(self, hook_id: int) -> PreReceiveHook:
        """Get a single hook.

        Raises:
            NotFoundError: If no hook has this id
        """
        return await self.connection.get(
            ApiUrls.admin_pre_receive_hooks(hook_id),
            PreReceiveHook,
            accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW,
        )

    async def create(self, new_hook: NewPreReceiveHook) -> PreReceiveHook:
        """Create a hook.

        Raises:
            ArgumentInvalidError: If new_hook is None (no request is sent)
            ApiValidationError: Duplicate name, unknown repository or environment
        """
        ensure_argument_not_none(new_hook, "new_hook")
        hook = await self.connection.post(
            ApiUrls.admin_pre_receive_hooks(),
            new_hook,
            PreReceiveHook,
            accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW,
        )
        logger.info("pre_receive_hook_created", extra={"hook_id": hook.id, "hook_name": hook.name})
        return hook

    async def edit(self, hook_id: int, update_hook: UpdatePreReceiveHook) -> PreReceiveHook:
        """Update a hook; fields left unset are unchanged.

        Raises:
            ArgumentInvalidError: If update_hook is None (no request is sent)
            NotFoundError: If no hook has this id
        """
        ensure_argument_not_none(update_hook, "update_hook")
        return await self.connection.patch(
            ApiUrls.admin_pre_receive_hooks(hook_id),
            update_hook,
            PreReceiveHook,
            accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW,
        )

    async def delete(self, hook_id: int) -> None:
        """Delete a hook.

        Raises:
            NotFoundError: If no hook has this id
        """
        await self.connection.delete(
            ApiUrls.admin_pre_receive_hooks(hook_id),
            accept=AcceptHeaders.PRE_RECEIVE_HOOKS_PREVIEW,
        )
        logger.info("pre_receive_hook_deleted", extra={"hook_id": hook_id})
