"""Session and command-execution engine."""

from .types import (
    Cookie,
    NewWindow,
    OptionRect,
    Rect,
    SessionId,
    TimeoutConfiguration,
    WindowHandle,
)
from .command import Command, CommandKind
from .connection import RemoteConnection, Transport
from .element import WebElement
from .actions import ActionChain
from .session import RemoteSession
from .session_factory import SessionFactory

__all__ = [
    "Cookie",
    "NewWindow",
    "OptionRect",
    "Rect",
    "SessionId",
    "TimeoutConfiguration",
    "WindowHandle",
    "Command",
    "CommandKind",
    "RemoteConnection",
    "Transport",
    "WebElement",
    "ActionChain",
    "RemoteSession",
    "SessionFactory",
]
