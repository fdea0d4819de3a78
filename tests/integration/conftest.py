"""Shared fixtures for integration tests."""

import os

import pytest

# Skip all integration tests unless RUN_APICLIENT_NETWORK_TESTS=1
pytestmark = pytest.mark.skipif(
    os.environ.get("RUN_APICLIENT_NETWORK_TESTS") != "1",
    reason="Requires network access. Set RUN_APICLIENT_NETWORK_TESTS=1 to run",
)


@pytest.fixture
def httpbin_url() -> str:
    return os.environ.get("APICLIENT_HTTPBIN_URL", "https://httpbin.org")
