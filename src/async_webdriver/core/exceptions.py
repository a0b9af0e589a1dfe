"""Error taxonomy for the async WebDriver client."""

from typing import Any, Optional


class WebDriverClientError(Exception):
    """Base exception for all client errors."""

    pass


class TransportError(WebDriverClientError):
    """Raised when a command could not be delivered or its envelope is unusable."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.url = url
        self.status_code = status_code
        detail = message
        if status_code is not None:
            detail = f"HTTP {status_code}: {detail}"
        if url:
            detail = f"{detail} ({url})"
        super().__init__(detail)


class ProtocolError(WebDriverClientError):
    """
    Raised when the remote end reports a failure inside a well-formed envelope.

    The W3C error string is kept in ``error`` so callers can branch on it
    even when no dedicated subclass exists.
    """

    def __init__(
        self,
        error: str,
        message: str = "",
        stacktrace: Optional[str] = None,
        data: Any = None,
    ):
        self.error = error
        self.message = message
        self.stacktrace = stacktrace
        self.data = data
        super().__init__(f"{error}: {message}" if message else error)


class NoSuchElementError(ProtocolError):
    """No element matched the given selector."""


class StaleElementReferenceError(ProtocolError):
    """The referenced element is no longer attached to the DOM."""


class ElementNotInteractableError(ProtocolError):
    """The element cannot receive the requested interaction."""


class ElementClickInterceptedError(ProtocolError):
    """Another element would receive the click."""


class InvalidElementStateError(ProtocolError):
    """The element is in a state that prevents the command."""


class InvalidSelectorError(ProtocolError):
    """The selector is malformed for its strategy."""


class InvalidArgumentError(ProtocolError):
    """A command argument was rejected by the remote end."""


class InvalidSessionIdError(ProtocolError):
    """The session id is unknown to the remote end or has ended."""


class SessionNotCreatedError(ProtocolError):
    """The remote end refused to open a new session."""


class NoSuchWindowError(ProtocolError):
    """The target window does not exist."""


class NoSuchFrameError(ProtocolError):
    """The target frame does not exist."""


class NoSuchAlertError(ProtocolError):
    """No user prompt is open."""


class UnexpectedAlertOpenError(ProtocolError):
    """A user prompt blocked the command."""


class NoSuchCookieError(ProtocolError):
    """No cookie matched the given name."""


class InvalidCookieDomainError(ProtocolError):
    """The cookie domain does not match the current page."""


class JavascriptError(ProtocolError):
    """The script raised an error in the page."""


class ScriptTimeoutError(ProtocolError):
    """The script did not complete before the script timeout."""


class OperationTimeoutError(ProtocolError):
    """The operation did not complete before its timeout."""


class MoveTargetOutOfBoundsError(ProtocolError):
    """A pointer move targeted a point outside the viewport."""


class UnknownCommandError(ProtocolError):
    """The remote end does not implement the command."""


class UnsupportedOperationError(ProtocolError):
    """The remote end cannot perform the command."""


class DecodeError(WebDriverClientError):
    """Raised when a response value does not match the command's result type."""

    def __init__(self, command: str, message: str, value: Any = None):
        self.command = command
        self.value = value
        super().__init__(f"Unexpected result for {command}: {message}")


class InitializationError(WebDriverClientError):
    """Raised when the new-session handshake yields no usable session id."""

    def __init__(self, message: str, response: Any = None):
        self.response = response
        super().__init__(f"Failed to start session: {message}")


class SessionClosedError(WebDriverClientError):
    """Raised when a session (or one of its handles) is used after quit."""

    def __init__(self, session_id: str = ""):
        self.session_id = session_id
        if session_id:
            super().__init__(f"Session has been closed: {session_id}")
        else:
            super().__init__("Session has been closed")
