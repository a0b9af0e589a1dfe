"""Unit tests for error mapper."""

import pytest

from async_webdriver.core.exceptions import (
    ProtocolError,
    NoSuchElementError,
    StaleElementReferenceError,
    InvalidSelectorError,
    InvalidSessionIdError,
    OperationTimeoutError,
    ScriptTimeoutError,
    NoSuchCookieError,
)
from async_webdriver.utils.error_mapper import (
    ErrorCode,
    EXCEPTION_MAP,
    is_error_payload,
    map_protocol_error,
)


class TestMapProtocolError:
    """Tests for mapping error payloads to exceptions."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            ("no such element", NoSuchElementError),
            ("stale element reference", StaleElementReferenceError),
            ("invalid selector", InvalidSelectorError),
            ("invalid session id", InvalidSessionIdError),
            ("timeout", OperationTimeoutError),
            ("script timeout", ScriptTimeoutError),
            ("no such cookie", NoSuchCookieError),
        ],
    )
    def test_map_known_errors(self, error, expected):
        """Should map each known error code to its exception class."""
        exc = map_protocol_error({"error": error, "message": "details"})

        assert type(exc) is expected
        assert exc.error == error
        assert "details" in str(exc)

    def test_map_unknown_error(self):
        """Should fall back to ProtocolError for unrecognized codes."""
        exc = map_protocol_error({"error": "vendor specific failure", "message": "oops"})

        assert type(exc) is ProtocolError
        assert exc.error == "vendor specific failure"

    def test_keeps_stacktrace_and_data(self):
        """Should carry the remote stacktrace and data through."""
        exc = map_protocol_error(
            {
                "error": "unexpected alert open",
                "message": "Alert open",
                "stacktrace": "at foo()",
                "data": {"text": "Are you sure?"},
            }
        )

        assert exc.stacktrace == "at foo()"
        assert exc.data == {"text": "Are you sure?"}

    def test_missing_message(self):
        """Should handle payloads without a message."""
        exc = map_protocol_error({"error": "no such window"})

        assert exc.message == ""
        assert str(exc) == "no such window"


class TestIsErrorPayload:
    """Tests for detecting error payloads."""

    def test_error_object(self):
        assert is_error_payload({"error": "no such element", "message": ""})

    def test_regular_object(self):
        assert not is_error_payload({"x": 1, "y": 2})

    def test_scalars(self):
        assert not is_error_payload("error")
        assert not is_error_payload(None)
        assert not is_error_payload([{"error": "no such element"}])


class TestExceptionMap:
    """Tests for exception map coverage."""

    def test_all_mapped_classes_are_protocol_errors(self):
        """Every mapped class should derive from ProtocolError."""
        for code, exc_class in EXCEPTION_MAP.items():
            assert isinstance(code, ErrorCode)
            assert issubclass(exc_class, ProtocolError)
