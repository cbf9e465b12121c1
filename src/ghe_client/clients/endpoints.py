"""URL templates and preview media types for the admin APIs.

Reference: https://docs.github.com/en/enterprise-server/rest/enterprise-admin
"""


class AcceptHeaders:
    """Accept header values, passed per call."""

    DEFAULT = "application/vnd.github+json"

    # Pre-receive hooks and environments were a preview API ("eye-scream")
    PRE_RECEIVE_HOOKS_PREVIEW = "application/vnd.github.eye-scream-preview+json"
    PRE_RECEIVE_ENVIRONMENTS_PREVIEW = PRE_RECEIVE_HOOKS_PREVIEW


class ApiUrls:
    """Relative resource paths."""

    @staticmethod
    def admin_pre_receive_hooks(hook_id: int | None = None) -> str:
        if hook_id is None:
            return "admin/pre-receive-hooks"
        return f"admin/pre-receive-hooks/{hook_id}"

    @staticmethod
    def admin_pre_receive_environments(environment_id: int | None = None) -> str:
        if environment_id is None:
            return "admin/pre-receive-environments"
        return f"admin/pre-receive-environments/{environment_id}"

    @staticmethod
    def admin_pre_receive_environment_download(environment_id: int) -> str:
        return f"admin/pre-receive-environments/{environment_id}/downloads"

    @staticmethod
    def admin_pre_receive_environment_download_status(environment_id: int) -> str:
        return f"admin/pre-receive-environments/{environment_id}/downloads/latest"
