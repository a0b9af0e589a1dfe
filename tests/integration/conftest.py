"""Fixtures for integration tests against a real Selenium Grid."""

import os

import pytest
import pytest_asyncio

from async_webdriver.core.session import RemoteSession
from async_webdriver.utils.capabilities import build_capabilities

# Set to the grid URL to run these tests, e.g. http://localhost:4444
GRID_URL_ENV = "ASYNC_WEBDRIVER_TEST_GRID_URL"


@pytest.fixture
def grid_url():
    """Return the Selenium Grid URL, skipping when none is configured."""
    url = os.environ.get(GRID_URL_ENV)
    if not url:
        pytest.skip(f"{GRID_URL_ENV} not set")
    return url


@pytest_asyncio.fixture
async def grid_session(grid_url):
    """Create a headless Chrome session and quit it after the test."""
    session = await RemoteSession.create(grid_url, build_capabilities("chrome", headless=True))
    yield session
    await session.quit()
