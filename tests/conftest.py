"""Pytest fixtures for testing the async WebDriver client."""

import pytest
from unittest.mock import MagicMock, AsyncMock

from async_webdriver.core.session import RemoteSession
from async_webdriver.core.element import WebElement


@pytest.fixture
def mock_transport():
    """Create a mock Transport whose commands succeed with a null value."""
    transport = MagicMock()
    transport.execute = AsyncMock(return_value={"value": None})
    return transport


@pytest.fixture
def capabilities():
    """Capabilities as negotiated by a typical remote end."""
    return {
        "browserName": "chrome",
        "browserVersion": "120.0",
        "platformName": "linux",
        "se:cdp": "ws://node:4444/session/abc/cdp",
    }


@pytest.fixture
def session(mock_transport, capabilities):
    """Create a RemoteSession bound to the mock transport."""
    session = RemoteSession(
        session_id="test-session-123",
        capabilities=capabilities,
        transport=mock_transport,
    )
    yield session
    # Mark closed so garbage collection does not schedule an end-session task
    session._session_id = ""


@pytest.fixture
def mock_element(mock_transport):
    """Create a WebElement bound to the mock transport."""
    return WebElement("elem-1", "test-session-123", mock_transport)
