"""Async client for remote browsers speaking the W3C WebDriver protocol."""

__version__ = "0.1.0"

from .config import Settings, settings, configure_logging
from .keys import Keys, TypingData
from .core import (
    ActionChain,
    Cookie,
    OptionRect,
    Rect,
    RemoteConnection,
    RemoteSession,
    SessionFactory,
    TimeoutConfiguration,
    WebElement,
    WindowHandle,
)
from .core.exceptions import (
    WebDriverClientError,
    TransportError,
    ProtocolError,
    DecodeError,
    InitializationError,
    SessionClosedError,
)
from .utils.capabilities import build_capabilities
from .utils.locators import By

__all__ = [
    "__version__",
    "Settings",
    "settings",
    "configure_logging",
    "Keys",
    "TypingData",
    "ActionChain",
    "Cookie",
    "OptionRect",
    "Rect",
    "RemoteConnection",
    "RemoteSession",
    "SessionFactory",
    "TimeoutConfiguration",
    "WebElement",
    "WindowHandle",
    "WebDriverClientError",
    "TransportError",
    "ProtocolError",
    "DecodeError",
    "InitializationError",
    "SessionClosedError",
    "build_capabilities",
    "By",
]
