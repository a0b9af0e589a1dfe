"""Protocol command model.

A ``Command`` is pure data: the operation kind, the session it targets, any
path parameters and the JSON body. Every kind declares its HTTP route and
the shape of the ``value`` it returns in ``COMMAND_SPECS``, so a result that
does not fit can be blamed on the command that produced it.
"""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Optional
from urllib.parse import quote

from .types import Cookie, NewWindow, Rect, TimeoutConfiguration

ElementReference = dict[str, str]


class CommandKind(str, Enum):
    """Every operation the client can request of the remote end."""

    # Sessions
    NEW_SESSION = "newSession"
    DELETE_SESSION = "deleteSession"
    STATUS = "status"
    GET_TIMEOUTS = "getTimeouts"
    SET_TIMEOUTS = "setTimeouts"

    # Navigation
    NAVIGATE_TO = "navigateTo"
    GET_CURRENT_URL = "getCurrentUrl"
    BACK = "back"
    FORWARD = "forward"
    REFRESH = "refresh"
    GET_TITLE = "getTitle"
    GET_PAGE_SOURCE = "getPageSource"

    # Windows and frames
    GET_WINDOW_HANDLE = "getWindowHandle"
    GET_WINDOW_HANDLES = "getWindowHandles"
    CLOSE_WINDOW = "closeWindow"
    SWITCH_TO_WINDOW = "switchToWindow"
    NEW_WINDOW = "newWindow"
    SWITCH_TO_FRAME = "switchToFrame"
    SWITCH_TO_PARENT_FRAME = "switchToParentFrame"
    GET_WINDOW_RECT = "getWindowRect"
    SET_WINDOW_RECT = "setWindowRect"
    MAXIMIZE_WINDOW = "maximizeWindow"
    MINIMIZE_WINDOW = "minimizeWindow"
    FULLSCREEN_WINDOW = "fullscreenWindow"

    # Elements
    GET_ACTIVE_ELEMENT = "getActiveElement"
    FIND_ELEMENT = "findElement"
    FIND_ELEMENTS = "findElements"
    FIND_ELEMENT_FROM_ELEMENT = "findElementFromElement"
    FIND_ELEMENTS_FROM_ELEMENT = "findElementsFromElement"
    IS_ELEMENT_SELECTED = "isElementSelected"
    IS_ELEMENT_ENABLED = "isElementEnabled"
    GET_ELEMENT_ATTRIBUTE = "getElementAttribute"
    GET_ELEMENT_PROPERTY = "getElementProperty"
    GET_ELEMENT_CSS_VALUE = "getElementCssValue"
    GET_ELEMENT_TEXT = "getElementText"
    GET_ELEMENT_TAG_NAME = "getElementTagName"
    GET_ELEMENT_RECT = "getElementRect"
    ELEMENT_CLICK = "elementClick"
    ELEMENT_CLEAR = "elementClear"
    ELEMENT_SEND_KEYS = "elementSendKeys"
    TAKE_ELEMENT_SCREENSHOT = "takeElementScreenshot"

    # Scripts
    EXECUTE_SCRIPT = "executeScript"
    EXECUTE_ASYNC_SCRIPT = "executeAsyncScript"

    # Cookies
    GET_ALL_COOKIES = "getAllCookies"
    GET_NAMED_COOKIE = "getNamedCookie"
    ADD_COOKIE = "addCookie"
    DELETE_COOKIE = "deleteCookie"
    DELETE_ALL_COOKIES = "deleteAllCookies"

    # Input
    PERFORM_ACTIONS = "performActions"
    RELEASE_ACTIONS = "releaseActions"

    # User prompts
    DISMISS_ALERT = "dismissAlert"
    ACCEPT_ALERT = "acceptAlert"
    GET_ALERT_TEXT = "getAlertText"
    SEND_ALERT_TEXT = "sendAlertText"

    # Screen capture
    TAKE_SCREENSHOT = "takeScreenshot"


class CommandSpec(NamedTuple):
    """HTTP route and expected result type for one command kind."""

    method: str
    path: str
    result: Any = Any


_S = "/session/{session_id}"
_E = _S + "/element/{element_id}"

# Commands whose value is ignored keep the default result of Any.
COMMAND_SPECS: dict[CommandKind, CommandSpec] = {
    CommandKind.NEW_SESSION: CommandSpec("POST", "/session", dict),
    CommandKind.DELETE_SESSION: CommandSpec("DELETE", _S),
    CommandKind.STATUS: CommandSpec("GET", "/status", dict),
    CommandKind.GET_TIMEOUTS: CommandSpec("GET", _S + "/timeouts", TimeoutConfiguration),
    CommandKind.SET_TIMEOUTS: CommandSpec("POST", _S + "/timeouts"),
    CommandKind.NAVIGATE_TO: CommandSpec("POST", _S + "/url"),
    CommandKind.GET_CURRENT_URL: CommandSpec("GET", _S + "/url", str),
    CommandKind.BACK: CommandSpec("POST", _S + "/back"),
    CommandKind.FORWARD: CommandSpec("POST", _S + "/forward"),
    CommandKind.REFRESH: CommandSpec("POST", _S + "/refresh"),
    CommandKind.GET_TITLE: CommandSpec("GET", _S + "/title", str),
    CommandKind.GET_PAGE_SOURCE: CommandSpec("GET", _S + "/source", str),
    CommandKind.GET_WINDOW_HANDLE: CommandSpec("GET", _S + "/window", str),
    CommandKind.GET_WINDOW_HANDLES: CommandSpec("GET", _S + "/window/handles", list[str]),
    CommandKind.CLOSE_WINDOW: CommandSpec("DELETE", _S + "/window", list[str]),
    CommandKind.SWITCH_TO_WINDOW: CommandSpec("POST", _S + "/window"),
    CommandKind.NEW_WINDOW: CommandSpec("POST", _S + "/window/new", NewWindow),
    CommandKind.SWITCH_TO_FRAME: CommandSpec("POST", _S + "/frame"),
    CommandKind.SWITCH_TO_PARENT_FRAME: CommandSpec("POST", _S + "/frame/parent"),
    CommandKind.GET_WINDOW_RECT: CommandSpec("GET", _S + "/window/rect", Rect),
    CommandKind.SET_WINDOW_RECT: CommandSpec("POST", _S + "/window/rect", Rect),
    CommandKind.MAXIMIZE_WINDOW: CommandSpec("POST", _S + "/window/maximize"),
    CommandKind.MINIMIZE_WINDOW: CommandSpec("POST", _S + "/window/minimize"),
    CommandKind.FULLSCREEN_WINDOW: CommandSpec("POST", _S + "/window/fullscreen"),
    CommandKind.GET_ACTIVE_ELEMENT: CommandSpec("GET", _S + "/element/active", ElementReference),
    CommandKind.FIND_ELEMENT: CommandSpec("POST", _S + "/element", ElementReference),
    CommandKind.FIND_ELEMENTS: CommandSpec("POST", _S + "/elements", list[ElementReference]),
    CommandKind.FIND_ELEMENT_FROM_ELEMENT: CommandSpec("POST", _E + "/element", ElementReference),
    CommandKind.FIND_ELEMENTS_FROM_ELEMENT: CommandSpec(
        "POST", _E + "/elements", list[ElementReference]
    ),
    CommandKind.IS_ELEMENT_SELECTED: CommandSpec("GET", _E + "/selected", bool),
    CommandKind.IS_ELEMENT_ENABLED: CommandSpec("GET", _E + "/enabled", bool),
    CommandKind.GET_ELEMENT_ATTRIBUTE: CommandSpec("GET", _E + "/attribute/{name}", Optional[str]),
    CommandKind.GET_ELEMENT_PROPERTY: CommandSpec("GET", _E + "/property/{name}"),
    CommandKind.GET_ELEMENT_CSS_VALUE: CommandSpec("GET", _E + "/css/{name}", str),
    CommandKind.GET_ELEMENT_TEXT: CommandSpec("GET", _E + "/text", str),
    CommandKind.GET_ELEMENT_TAG_NAME: CommandSpec("GET", _E + "/name", str),
    CommandKind.GET_ELEMENT_RECT: CommandSpec("GET", _E + "/rect", Rect),
    CommandKind.ELEMENT_CLICK: CommandSpec("POST", _E + "/click"),
    CommandKind.ELEMENT_CLEAR: CommandSpec("POST", _E + "/clear"),
    CommandKind.ELEMENT_SEND_KEYS: CommandSpec("POST", _E + "/value"),
    CommandKind.TAKE_ELEMENT_SCREENSHOT: CommandSpec("GET", _E + "/screenshot", str),
    CommandKind.EXECUTE_SCRIPT: CommandSpec("POST", _S + "/execute/sync"),
    CommandKind.EXECUTE_ASYNC_SCRIPT: CommandSpec("POST", _S + "/execute/async"),
    CommandKind.GET_ALL_COOKIES: CommandSpec("GET", _S + "/cookie", list[Cookie]),
    CommandKind.GET_NAMED_COOKIE: CommandSpec("GET", _S + "/cookie/{name}", Cookie),
    CommandKind.ADD_COOKIE: CommandSpec("POST", _S + "/cookie"),
    CommandKind.DELETE_COOKIE: CommandSpec("DELETE", _S + "/cookie/{name}"),
    CommandKind.DELETE_ALL_COOKIES: CommandSpec("DELETE", _S + "/cookie"),
    CommandKind.PERFORM_ACTIONS: CommandSpec("POST", _S + "/actions"),
    CommandKind.RELEASE_ACTIONS: CommandSpec("DELETE", _S + "/actions"),
    CommandKind.DISMISS_ALERT: CommandSpec("POST", _S + "/alert/dismiss"),
    CommandKind.ACCEPT_ALERT: CommandSpec("POST", _S + "/alert/accept"),
    CommandKind.GET_ALERT_TEXT: CommandSpec("GET", _S + "/alert/text", Optional[str]),
    CommandKind.SEND_ALERT_TEXT: CommandSpec("POST", _S + "/alert/text"),
    CommandKind.TAKE_SCREENSHOT: CommandSpec("GET", _S + "/screenshot", str),
}


def _placeholders(path: str) -> frozenset[str]:
    return frozenset(
        name for _, name, _, _ in string.Formatter().parse(path) if name
    )


@dataclass(frozen=True)
class Command:
    """
    One protocol operation with its operands.

    Args:
        kind: Operation to perform
        session_id: Target session (required for everything except
            new-session and status)
        params: Path parameters such as ``element_id`` or cookie ``name``
        body: JSON body for POST commands

    Raises:
        ValueError: If the session id or a path parameter is missing
    """

    kind: CommandKind
    session_id: Optional[str] = None
    params: dict[str, str] = field(default_factory=dict)
    body: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        required = _placeholders(self.spec.path)
        if "session_id" in required and not self.session_id:
            raise ValueError(f"{self.kind.value} requires a session id")
        missing = sorted(
            name for name in required - {"session_id"} if not self.params.get(name)
        )
        if missing:
            raise ValueError(
                f"{self.kind.value} is missing path parameters: {missing}"
            )

    @property
    def spec(self) -> CommandSpec:
        return COMMAND_SPECS[self.kind]

    @property
    def method(self) -> str:
        return self.spec.method

    @property
    def path(self) -> str:
        """Request path with session and path parameters filled in."""
        params = {name: quote(str(value), safe="") for name, value in self.params.items()}
        return self.spec.path.format(session_id=self.session_id, **params)

    @property
    def result_type(self) -> Any:
        return self.spec.result
