"""Map W3C WebDriver error payloads to client exceptions."""

from enum import Enum
from typing import Any, Mapping

from ..core.exceptions import (
    ProtocolError,
    NoSuchElementError,
    StaleElementReferenceError,
    ElementNotInteractableError,
    ElementClickInterceptedError,
    InvalidElementStateError,
    InvalidSelectorError,
    InvalidArgumentError,
    InvalidSessionIdError,
    SessionNotCreatedError,
    NoSuchWindowError,
    NoSuchFrameError,
    NoSuchAlertError,
    UnexpectedAlertOpenError,
    NoSuchCookieError,
    InvalidCookieDomainError,
    JavascriptError,
    ScriptTimeoutError,
    OperationTimeoutError,
    MoveTargetOutOfBoundsError,
    UnknownCommandError,
    UnsupportedOperationError,
)


class ErrorCode(str, Enum):
    """Error strings defined by the W3C WebDriver protocol."""

    # Element errors
    NO_SUCH_ELEMENT = "no such element"
    STALE_ELEMENT_REFERENCE = "stale element reference"
    ELEMENT_NOT_INTERACTABLE = "element not interactable"
    ELEMENT_CLICK_INTERCEPTED = "element click intercepted"
    INVALID_ELEMENT_STATE = "invalid element state"
    DETACHED_SHADOW_ROOT = "detached shadow root"
    NO_SUCH_SHADOW_ROOT = "no such shadow root"

    # Selector errors
    INVALID_SELECTOR = "invalid selector"

    # Session errors
    INVALID_SESSION_ID = "invalid session id"
    SESSION_NOT_CREATED = "session not created"

    # Navigation errors
    INSECURE_CERTIFICATE = "insecure certificate"

    # Timeout errors
    TIMEOUT = "timeout"
    SCRIPT_TIMEOUT = "script timeout"

    # Window/Frame errors
    NO_SUCH_WINDOW = "no such window"
    NO_SUCH_FRAME = "no such frame"

    # Alert errors
    NO_SUCH_ALERT = "no such alert"
    UNEXPECTED_ALERT_OPEN = "unexpected alert open"

    # Cookie errors
    NO_SUCH_COOKIE = "no such cookie"
    INVALID_COOKIE_DOMAIN = "invalid cookie domain"
    UNABLE_TO_SET_COOKIE = "unable to set cookie"

    # JavaScript errors
    JAVASCRIPT_ERROR = "javascript error"

    # Input errors
    MOVE_TARGET_OUT_OF_BOUNDS = "move target out of bounds"

    # Generic errors
    INVALID_ARGUMENT = "invalid argument"
    UNKNOWN_COMMAND = "unknown command"
    UNKNOWN_METHOD = "unknown method"
    UNSUPPORTED_OPERATION = "unsupported operation"
    UNABLE_TO_CAPTURE_SCREEN = "unable to capture screen"
    UNKNOWN_ERROR = "unknown error"


# Map protocol error codes to exception classes
EXCEPTION_MAP: dict[ErrorCode, type[ProtocolError]] = {
    ErrorCode.NO_SUCH_ELEMENT: NoSuchElementError,
    ErrorCode.STALE_ELEMENT_REFERENCE: StaleElementReferenceError,
    ErrorCode.ELEMENT_NOT_INTERACTABLE: ElementNotInteractableError,
    ErrorCode.ELEMENT_CLICK_INTERCEPTED: ElementClickInterceptedError,
    ErrorCode.INVALID_ELEMENT_STATE: InvalidElementStateError,
    ErrorCode.DETACHED_SHADOW_ROOT: StaleElementReferenceError,
    ErrorCode.NO_SUCH_SHADOW_ROOT: NoSuchElementError,
    ErrorCode.INVALID_SELECTOR: InvalidSelectorError,
    ErrorCode.INVALID_SESSION_ID: InvalidSessionIdError,
    ErrorCode.SESSION_NOT_CREATED: SessionNotCreatedError,
    ErrorCode.TIMEOUT: OperationTimeoutError,
    ErrorCode.SCRIPT_TIMEOUT: ScriptTimeoutError,
    ErrorCode.NO_SUCH_WINDOW: NoSuchWindowError,
    ErrorCode.NO_SUCH_FRAME: NoSuchFrameError,
    ErrorCode.NO_SUCH_ALERT: NoSuchAlertError,
    ErrorCode.UNEXPECTED_ALERT_OPEN: UnexpectedAlertOpenError,
    ErrorCode.NO_SUCH_COOKIE: NoSuchCookieError,
    ErrorCode.INVALID_COOKIE_DOMAIN: InvalidCookieDomainError,
    ErrorCode.UNABLE_TO_SET_COOKIE: InvalidCookieDomainError,
    ErrorCode.JAVASCRIPT_ERROR: JavascriptError,
    ErrorCode.MOVE_TARGET_OUT_OF_BOUNDS: MoveTargetOutOfBoundsError,
    ErrorCode.INVALID_ARGUMENT: InvalidArgumentError,
    ErrorCode.UNKNOWN_COMMAND: UnknownCommandError,
    ErrorCode.UNKNOWN_METHOD: UnknownCommandError,
    ErrorCode.UNSUPPORTED_OPERATION: UnsupportedOperationError,
}


def is_error_payload(value: Any) -> bool:
    """Return True if a response ``value`` encodes a remote-end error."""
    return isinstance(value, Mapping) and isinstance(value.get("error"), str)


def map_protocol_error(payload: Mapping[str, Any]) -> ProtocolError:
    """
    Build the exception for a remote-end error payload.

    Args:
        payload: The ``value`` object of an error envelope

    Returns:
        ProtocolError subclass matching the error code, or ProtocolError
        itself for codes without a dedicated class
    """
    error = str(payload.get("error", ErrorCode.UNKNOWN_ERROR.value))
    message = payload.get("message") or ""
    stacktrace = payload.get("stacktrace") or None
    data = payload.get("data")

    try:
        exc_class = EXCEPTION_MAP.get(ErrorCode(error), ProtocolError)
    except ValueError:
        exc_class = ProtocolError

    return exc_class(error, str(message), stacktrace=stacktrace, data=data)
