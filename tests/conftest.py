"""Shared pytest fixtures for ghe-client tests.

Fixture Organization:
    - Fake server fixtures: in-memory GHE admin API behind httpx.MockTransport
    - Client fixtures: ApiConnection / GitHubClient wired to the fake server
    - Isolation fixtures: config singleton, logging handlers, metrics registry

References:
    - pytest fixtures docs: https://docs.pytest.org/en/stable/how-to/fixtures.html
    - httpx MockTransport: https://www.python-httpx.org/advanced/transports/#mock-transports
"""

import contextlib
import logging
import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add tests directory to sys.path so test modules can import mocks.ghe_server
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from mocks.ghe_server import BASE_URL, FakeGHEServer  # noqa: E402

from ghe_client import GitHubClient, InMemoryCredentialStore  # noqa: E402
from ghe_client.config import reset_config  # noqa: E402
from ghe_client.http import ApiConnection  # noqa: E402

# =============================================================================
# Pytest CLI Options
# =============================================================================


def pytest_addoption(parser):
    """Add custom command line options for test selection."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against a live GitHub Enterprise Server",
    )


def pytest_sessionstart(session):
    """Clear the Prometheus REGISTRY before collection.

    Prevents duplicate registration errors if a collector was registered by
    a previous import in the same interpreter.
    """
    try:
        from prometheus_client import REGISTRY

        collectors = list(REGISTRY._names_to_collectors.values())
        for collector in collectors:
            with contextlib.suppress(Exception):
                REGISTRY.unregister(collector)
    except ImportError:
        pass  # prometheus_client not installed


def pytest_collection_modifyitems(session, config, items):
    """Skip integration tests unless --run-integration is provided."""
    if config.getoption("--run-integration", default=False):
        return

    skip_integration = pytest.mark.skip(
        reason="Need --run-integration option to run integration tests"
    )
    for item in items:
        if "integration" in item.keywords or "/integration/" in str(item.fspath):
            item.add_marker(skip_integration)


# =============================================================================
# Isolation Fixtures (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def reset_logging():
    """Re-enable propagation on ghe_client loggers so caplog can capture them.

    configure_logging() runs at import time and attaches a handler with
    propagate=False to the ghe_client root logger.
    """
    logger = logging.getLogger("ghe_client")
    saved_handlers = list(logger.handlers)
    saved_propagate = logger.propagate
    saved_level = logger.level

    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.DEBUG)

    yield

    logger.handlers[:] = saved_handlers
    logger.propagate = saved_propagate
    logger.setLevel(saved_level)


@pytest.fixture(autouse=True)
def isolated_config(request, monkeypatch):
    """Clear GHE_* variables and the config singleton around every test.

    Integration tests keep the environment: it points them at the live server.
    """
    import os

    if not request.node.get_closest_marker("integration"):
        for name in list(os.environ):
            if name.startswith("GHE_"):
                monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Fake Server Fixtures
# =============================================================================


@pytest.fixture
def ghe_server():
    """Fake GHE admin API with only the default environment (id 1)."""
    return FakeGHEServer()


@pytest.fixture
def seeded_server(ghe_server):
    """Fake server with five hooks (ids 2-6) in the default environment."""
    for n in range(1, 6):
        ghe_server.add_hook(f"hook-{n}", script=f"scripts/hook_{n}.sh")
    return ghe_server


@pytest_asyncio.fixture
async def connection(ghe_server):
    """ApiConnection routed to the fake server."""
    conn = ApiConnection(
        BASE_URL,
        InMemoryCredentialStore("ghp_test_token_123"),
        transport=ghe_server.transport,
    )
    yield conn
    await conn.close()


@pytest_asyncio.fixture
async def github(ghe_server):
    """GitHubClient routed to the fake server."""
    client = GitHubClient(
        BASE_URL,
        InMemoryCredentialStore("ghp_test_token_123"),
        transport=ghe_server.transport,
    )
    yield client
    await client.close()
