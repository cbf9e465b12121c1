"""Integration test fixtures for ghe-client.

Runs against a live GitHub Enterprise Server. Requires:
    GHE_BASE_URL   e.g. https://ghe.example.com/api/v3
    GHE_TOKEN      site admin token with admin:pre_receive_hook scope
    GHE_TEST_HOOK_REPOSITORY   repository holding hook scripts (owner/repo)

Run with: pytest --run-integration tests/integration
"""

import os
import uuid

import pytest
import pytest_asyncio

from ghe_client import GitHubClient
from ghe_client.config import ClientConfig

REQUIRED_VARS = ("GHE_BASE_URL", "GHE_TOKEN")


def pytest_collection_modifyitems(items):
    """Auto-apply @pytest.mark.integration to all tests in this directory.

    Ensures `pytest -m 'not integration'` excludes ALL integration tests,
    even if individual test classes lack explicit markers.
    """
    for item in items:
        if "/tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.requires_ghe)


@pytest.fixture(autouse=True)
def skip_without_ghe(request):
    """Skip when the live server is not configured."""
    if request.node.get_closest_marker("requires_ghe"):
        missing = [name for name in REQUIRED_VARS if not os.environ.get(name)]
        if missing:
            pytest.skip(f"GitHub Enterprise Server not configured ({', '.join(missing)} unset)")


@pytest.fixture
def hook_repository():
    repo = os.environ.get("GHE_TEST_HOOK_REPOSITORY")
    if not repo:
        pytest.skip("GHE_TEST_HOOK_REPOSITORY not set")
    return repo


@pytest.fixture
def unique_name():
    """Resource names that do not collide across runs."""
    return lambda prefix: f"{prefix}-{uuid.uuid4().hex[:8]}"


@pytest_asyncio.fixture
async def live_github():
    """GitHubClient configured from GHE_* variables, with retries for safe calls."""
    config = ClientConfig(max_retries=2)
    async with GitHubClient.from_config(config) as github:
        yield github
