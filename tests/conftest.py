"""
Shared pytest fixtures for the client test suite.

This module provides fixtures that are automatically available to all test files:
- A test Config pointing at a fake server URL
- An authenticated AIDungeonClient with no story running

HTTP traffic is mocked per test with respx; no fixture here touches the
network.
"""

from collections.abc import Generator

import pytest

from aidungeon_client.api.client import AIDungeonClient
from aidungeon_client.api.transport import bind
from aidungeon_client.config import Config
from tests.constants import BASE_URL, TEST_TOKEN


@pytest.fixture
def config() -> Config:
    """Create a test configuration."""
    return Config(base_url=BASE_URL, timeout=10.0)


@pytest.fixture
def client(config: Config) -> Generator[AIDungeonClient, None, None]:
    """
    Authenticated client handle with no active story.

    Yields:
        AIDungeonClient bound to TEST_TOKEN.

    Cleanup:
        Closes the underlying HTTP client.
    """
    with AIDungeonClient(bind(TEST_TOKEN, config=config)) as handle:
        yield handle
