"""List pre-receive hooks and their environments on a GitHub Enterprise Server.

Demonstrates:
- Building a client from GHE_* environment variables
- Context manager pattern for automatic cleanup
- Page budgets with ApiOptions
- Handling typed API errors

Requirements:
- Python 3.10+
- GHE_BASE_URL (e.g. https://ghe.example.com/api/v3)
- GHE_TOKEN with the admin:pre_receive_hook scope
- GHE_LOG_FORMAT=text for human-readable logs (optional)

Run:
    python3 examples/list_pre_receive_hooks.py
"""

import asyncio
import logging
import os

from ghe_client import (
    ApiError,
    ApiOptions,
    GitHubClient,
    RateLimitExceeded,
)

logger = logging.getLogger("ghe_client.examples")


async def list_hooks() -> None:
    if not os.getenv("GHE_BASE_URL"):
        logger.error("GHE_BASE_URL not set in environment")
        return

    async with GitHubClient.from_config() as github:
        try:
            environments = await github.enterprise.pre_receive_environments.get_all()
            hooks = await github.enterprise.pre_receive_hooks.get_all(ApiOptions(page_size=50))
        except RateLimitExceeded as e:
            logger.error("rate_limited", extra={"reset_at": e.reset_at})
            return
        except ApiError as e:
            logger.error("listing_failed", extra={"error": str(e), "status_code": e.status_code})
            return

        for env in environments:
            state = env.download.state.value if env.download else "unknown"
            print(f"environment {env.id:>4}  {env.name:<30} download={state}")

        for hook in hooks:
            env_name = hook.environment.name if hook.environment else "-"
            enforcement = hook.enforcement.value if hook.enforcement else "-"
            print(f"hook        {hook.id:>4}  {hook.name:<30} {enforcement:<9} env={env_name}")

        info = github.connection.last_api_info
        if info and info.rate_limit:
            print(f"rate limit remaining: {info.rate_limit.remaining}/{info.rate_limit.limit}")


if __name__ == "__main__":
    asyncio.run(list_hooks())
