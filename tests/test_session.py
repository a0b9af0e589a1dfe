"""Unit tests for RemoteSession."""

import asyncio
import base64
import gc
import logging
from datetime import timedelta

import pytest
from unittest.mock import AsyncMock, MagicMock

from async_webdriver.core.command import CommandKind
from async_webdriver.core.element import WebElement
from async_webdriver.core.exceptions import (
    DecodeError,
    InitializationError,
    NoSuchElementError,
    SessionClosedError,
    SessionNotCreatedError,
    TransportError,
)
from async_webdriver.core.session import RemoteSession, resolve_new_session
from async_webdriver.core.types import Cookie, ELEMENT_KEY, OptionRect, Rect, TimeoutConfiguration
from async_webdriver.utils.locators import By

from helpers import element_ref, sent_command


class TestResolveNewSession:
    """Tests for new-session response handling."""

    def test_top_level_fields(self):
        """Should read sessionId and capabilities from the top level."""
        session_id, caps = resolve_new_session(
            {"sessionId": "abc", "capabilities": {"browserName": "firefox"}, "value": None}
        )
        assert session_id == "abc"
        assert caps == {"browserName": "firefox"}

    def test_nested_fields(self):
        """Should fall back to fields nested under value."""
        session_id, caps = resolve_new_session(
            {"value": {"sessionId": "abc", "capabilities": {"browserName": "chrome"}}}
        )
        assert session_id == "abc"
        assert caps == {"browserName": "chrome"}

    def test_top_level_wins(self):
        """A non-empty top-level field should take precedence over the nested one."""
        session_id, caps = resolve_new_session(
            {
                "sessionId": "top",
                "capabilities": {"browserName": "firefox"},
                "value": {"sessionId": "nested", "capabilities": {"browserName": "chrome"}},
            }
        )
        assert session_id == "top"
        assert caps == {"browserName": "firefox"}

    def test_empty_top_level_falls_back(self):
        """An empty top-level id should not hide a nested one."""
        session_id, _ = resolve_new_session({"sessionId": "", "value": {"sessionId": "nested"}})
        assert session_id == "nested"

    def test_missing_id(self):
        """A reply without a session id should raise InitializationError."""
        with pytest.raises(InitializationError):
            resolve_new_session({"value": {"capabilities": {}}})

    def test_missing_capabilities(self):
        """Missing capabilities should resolve to an empty mapping."""
        _, caps = resolve_new_session({"value": {"sessionId": "abc"}})
        assert caps == {}

    def test_error_payload(self):
        """An error payload should raise the mapped ProtocolError."""
        with pytest.raises(SessionNotCreatedError):
            resolve_new_session(
                {"value": {"error": "session not created", "message": "no matching node"}}
            )


class TestCreate:
    """Tests for RemoteSession.create."""

    @pytest.mark.asyncio
    async def test_create(self, mock_transport):
        """Should send the new-session handshake and bind the returned id."""
        mock_transport.execute.return_value = {
            "value": {"sessionId": "abc", "capabilities": {"browserName": "chrome"}}
        }

        session = await RemoteSession.create(
            "http://grid:4444", {"browserName": "chrome"}, transport=mock_transport
        )

        command = sent_command(mock_transport)
        assert command.kind == CommandKind.NEW_SESSION
        assert command.body == {
            "capabilities": {"alwaysMatch": {"browserName": "chrome"}, "firstMatch": [{}]}
        }
        assert session.session_id == "abc"
        assert session.capabilities["browserName"] == "chrome"
        session._session_id = ""

    @pytest.mark.asyncio
    async def test_create_without_id(self, mock_transport):
        """Should raise InitializationError when the reply has no id."""
        mock_transport.execute.return_value = {"value": {"capabilities": {}}}

        with pytest.raises(InitializationError):
            await RemoteSession.create("http://grid:4444", {}, transport=mock_transport)

    @pytest.mark.asyncio
    async def test_create_refused(self, mock_transport):
        """Should raise SessionNotCreatedError when the remote end refuses."""
        mock_transport.execute.return_value = {
            "value": {"error": "session not created", "message": "busy"}
        }

        with pytest.raises(SessionNotCreatedError):
            await RemoteSession.create("http://grid:4444", {}, transport=mock_transport)

    def test_empty_id_rejected(self, mock_transport):
        """A session cannot be built with an empty id."""
        with pytest.raises(InitializationError):
            RemoteSession("", {}, mock_transport)

    def test_capabilities_read_only(self, session):
        """Negotiated capabilities should not be writable."""
        with pytest.raises(TypeError):
            session.capabilities["browserName"] = "firefox"


class TestNavigation:
    """Tests for navigation commands."""

    @pytest.mark.asyncio
    async def test_get(self, session, mock_transport):
        """Should send navigate with the URL."""
        await session.get("https://example.com")

        command = sent_command(mock_transport)
        assert command.kind == CommandKind.NAVIGATE_TO
        assert command.body == {"url": "https://example.com"}
        assert command.path == "/session/test-session-123/url"

    @pytest.mark.asyncio
    async def test_title(self, session, mock_transport):
        """Should return the page title."""
        mock_transport.execute.return_value = {"value": "Example Domain"}

        assert await session.title() == "Example Domain"

    @pytest.mark.asyncio
    async def test_current_url(self, session, mock_transport):
        mock_transport.execute.return_value = {"value": "https://example.com/"}

        assert await session.current_url() == "https://example.com/"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method,kind",
        [
            ("back", CommandKind.BACK),
            ("forward", CommandKind.FORWARD),
            ("refresh", CommandKind.REFRESH),
        ],
    )
    async def test_history(self, session, mock_transport, method, kind):
        """History commands should each send one command."""
        await getattr(session, method)()

        assert mock_transport.execute.await_count == 1
        assert sent_command(mock_transport).kind == kind


class TestElements:
    """Tests for element lookup through the session."""

    @pytest.mark.asyncio
    async def test_find_element(self, session, mock_transport):
        """Should send the selector and wrap the returned reference."""
        mock_transport.execute.return_value = {"value": element_ref("e1")}

        element = await session.find_element(By.css("#login"))

        assert sent_command(mock_transport).body == {"using": "css selector", "value": "#login"}
        assert element.element_id == "e1"
        assert element.session_id == "test-session-123"

    @pytest.mark.asyncio
    async def test_find_elements_distinct_ids(self, session, mock_transport):
        """Each found element should issue commands with its own id."""
        mock_transport.execute.return_value = {"value": [element_ref("e1"), element_ref("e2")]}
        first, second = await session.find_elements(By.tag_name("li"))

        mock_transport.execute.return_value = {"value": "one"}
        await first.text()
        assert sent_command(mock_transport).path.endswith("/element/e1/text")

        await second.text()
        assert sent_command(mock_transport).path.endswith("/element/e2/text")

    @pytest.mark.asyncio
    async def test_find_elements_empty(self, session, mock_transport):
        mock_transport.execute.return_value = {"value": []}

        assert await session.find_elements(By.css(".none")) == []

    @pytest.mark.asyncio
    async def test_no_such_element(self, session, mock_transport):
        mock_transport.execute.return_value = {
            "value": {"error": "no such element", "message": "#missing"}
        }

        with pytest.raises(NoSuchElementError):
            await session.find_element(By.css("#missing"))


class TestScripts:
    """Tests for script execution."""

    @pytest.mark.asyncio
    async def test_plain_result(self, session, mock_transport):
        """Should pass args through and return JSON values unchanged."""
        mock_transport.execute.return_value = {"value": {"count": 3}}

        result = await session.execute_script("return {count: arguments[0]}", 3)

        assert sent_command(mock_transport).body == {
            "script": "return {count: arguments[0]}",
            "args": [3],
        }
        assert result == {"count": 3}

    @pytest.mark.asyncio
    async def test_element_arguments_and_results(self, session, mock_transport, mock_element):
        """Elements should travel as references in both directions."""
        mock_transport.execute.return_value = {"value": [element_ref("e9"), 1]}

        result = await session.execute_script("return [arguments[0].parentNode, 1]", mock_element)

        assert sent_command(mock_transport).body["args"] == [{ELEMENT_KEY: "elem-1"}]
        assert isinstance(result[0], WebElement)
        assert result[0].element_id == "e9"
        assert result[1] == 1

    @pytest.mark.asyncio
    async def test_async_script(self, session, mock_transport):
        mock_transport.execute.return_value = {"value": "done"}

        result = await session.execute_async_script("arguments[0]('done')")

        assert sent_command(mock_transport).kind == CommandKind.EXECUTE_ASYNC_SCRIPT
        assert result == "done"


class TestWindows:
    """Tests for window commands."""

    @pytest.mark.asyncio
    async def test_window_handles(self, session, mock_transport):
        mock_transport.execute.return_value = {"value": ["w1", "w2"]}

        assert await session.window_handles() == ["w1", "w2"]

    @pytest.mark.asyncio
    async def test_set_window_rect_partial(self, session, mock_transport):
        """Only the given fields should be sent."""
        mock_transport.execute.return_value = {
            "value": {"x": 0, "y": 0, "width": 1280, "height": 720}
        }

        rect = await session.set_window_rect(OptionRect(width=1280, height=720))

        assert sent_command(mock_transport).body == {"width": 1280, "height": 720}
        assert rect == Rect(x=0, y=0, width=1280, height=720)

    @pytest.mark.asyncio
    async def test_close_returns_remaining(self, session, mock_transport):
        """close() should close the window but keep the session open."""
        mock_transport.execute.return_value = {"value": ["w2"]}

        assert await session.close() == ["w2"]
        assert session.is_active

    @pytest.mark.asyncio
    async def test_new_window(self, session, mock_transport):
        """new_window should return the handle of the opened window."""
        mock_transport.execute.return_value = {"value": {"handle": "w3", "type": "tab"}}

        handle = await session.switch_to.new_window("tab")

        assert handle == "w3"
        assert sent_command(mock_transport).body == {"type": "tab"}

    @pytest.mark.asyncio
    async def test_new_window_without_handle(self, session, mock_transport):
        """A new-window reply without a handle should raise DecodeError."""
        mock_transport.execute.return_value = {"value": {"type": "tab"}}

        with pytest.raises(DecodeError) as exc:
            await session.switch_to.new_window()

        assert exc.value.command == "newWindow"

    @pytest.mark.asyncio
    async def test_switch_to_frame(self, session, mock_transport, mock_element):
        await session.switch_to.frame(mock_element)

        command = sent_command(mock_transport)
        assert command.kind == CommandKind.SWITCH_TO_FRAME
        assert command.body == {"id": {ELEMENT_KEY: "elem-1"}}


class TestTimeouts:
    """Tests for timeout commands."""

    @pytest.mark.asyncio
    async def test_implicitly_wait(self, session, mock_transport):
        """Only the implicit timeout should be sent, in milliseconds."""
        await session.implicitly_wait(5)

        assert sent_command(mock_transport).body == {"implicit": 5000}

    @pytest.mark.asyncio
    async def test_page_load_timedelta(self, session, mock_transport):
        await session.set_page_load_timeout(timedelta(seconds=1.5))

        assert sent_command(mock_transport).body == {"pageLoad": 1500}

    @pytest.mark.asyncio
    async def test_get_timeouts(self, session, mock_transport):
        mock_transport.execute.return_value = {
            "value": {"script": 30000, "pageLoad": 300000, "implicit": 0}
        }

        timeouts = await session.get_timeouts()

        assert timeouts == TimeoutConfiguration(script=30000, page_load=300000, implicit=0)


class TestCookies:
    """Tests for cookie commands."""

    @pytest.mark.asyncio
    async def test_get_cookie_omits_absent_fields(self, session, mock_transport):
        """A cookie without optional fields should re-serialize without them."""
        mock_transport.execute.return_value = {"value": {"name": "sid", "value": "42"}}

        cookie = await session.get_cookie("sid")

        assert sent_command(mock_transport).path.endswith("/cookie/sid")
        assert cookie.to_json() == {"name": "sid", "value": "42"}

    @pytest.mark.asyncio
    async def test_add_cookie(self, session, mock_transport):
        await session.add_cookie(Cookie(name="sid", value="42", http_only=True))

        assert sent_command(mock_transport).body == {
            "cookie": {"name": "sid", "value": "42", "httpOnly": True}
        }

    @pytest.mark.asyncio
    async def test_add_cookie_from_mapping(self, session, mock_transport):
        await session.add_cookie({"name": "sid", "value": "42", "sameSite": "Lax"})

        assert sent_command(mock_transport).body == {
            "cookie": {"name": "sid", "value": "42", "sameSite": "Lax"}
        }

    @pytest.mark.asyncio
    async def test_get_cookies(self, session, mock_transport):
        mock_transport.execute.return_value = {
            "value": [{"name": "a", "value": "1"}, {"name": "b", "value": "2", "secure": True}]
        }

        cookies = await session.get_cookies()

        assert [c.name for c in cookies] == ["a", "b"]
        assert cookies[1].secure is True


class TestScreenshots:
    """Tests for session screenshots."""

    @pytest.mark.asyncio
    async def test_screenshot_as_png(self, session, mock_transport):
        png = b"\x89PNG\r\n\x1a\nfake"
        mock_transport.execute.return_value = {"value": base64.b64encode(png).decode()}

        assert await session.screenshot_as_png() == png

    @pytest.mark.asyncio
    async def test_screenshot_to_file(self, session, mock_transport, tmp_path):
        """Should write the decoded PNG to the given path."""
        png = b"\x89PNG\r\n\x1a\nfake"
        mock_transport.execute.return_value = {"value": base64.b64encode(png).decode()}
        path = tmp_path / "page.png"

        await session.screenshot(path)

        assert path.read_bytes() == png


class TestLifecycle:
    """Tests for quit, context management and implicit teardown."""

    @pytest.mark.asyncio
    async def test_quit_sends_delete_once(self, session, mock_transport):
        """quit() should end the session exactly once."""
        await session.quit()
        await session.quit()

        assert mock_transport.execute.await_count == 1
        command = sent_command(mock_transport)
        assert command.kind == CommandKind.DELETE_SESSION
        assert command.path == "/session/test-session-123"
        assert not session.is_active

    @pytest.mark.asyncio
    async def test_use_after_quit(self, session, mock_transport):
        """Commands after quit() should fail locally without a request."""
        await session.quit()

        with pytest.raises(SessionClosedError):
            await session.title()
        assert mock_transport.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_failed_quit_still_closes(self, session, mock_transport):
        """A failing end-session command should not allow a second attempt."""
        mock_transport.execute.side_effect = TransportError("Connection refused")

        with pytest.raises(TransportError):
            await session.quit()
        await session.quit()

        assert mock_transport.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_quit_closes_owned_connection(self, mock_transport):
        connection = MagicMock()
        connection.aclose = AsyncMock()
        session = RemoteSession("abc", {}, mock_transport, connection=connection)

        await session.quit()

        connection.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_context_manager(self, mock_transport):
        """Leaving the block should quit the session."""
        async with RemoteSession("abc", {}, mock_transport) as session:
            await session.refresh()

        assert not session.is_active
        assert sent_command(mock_transport).kind == CommandKind.DELETE_SESSION

    @pytest.mark.asyncio
    async def test_dropped_session_ends_in_background(self, mock_transport):
        """A session dropped without quit() should end itself on the running loop."""
        session = RemoteSession("abc", {}, mock_transport)
        del session
        gc.collect()
        for _ in range(3):
            await asyncio.sleep(0)

        command = sent_command(mock_transport)
        assert command.kind == CommandKind.DELETE_SESSION
        assert command.session_id == "abc"

    @pytest.mark.asyncio
    async def test_dropped_session_failure_is_logged(self, mock_transport, caplog):
        """Failures of the background end-session task should be logged, not raised."""
        mock_transport.execute.side_effect = TransportError("Connection refused")
        session = RemoteSession("abc", {}, mock_transport)

        with caplog.at_level(logging.ERROR, logger="async_webdriver.core.session"):
            del session
            gc.collect()
            for _ in range(3):
                await asyncio.sleep(0)

        assert "Error closing abandoned session abc" in caplog.text

    def test_dropped_session_without_loop(self, mock_transport, caplog):
        """Without a running loop, dropping a session should only warn."""
        session = RemoteSession("abc", {}, mock_transport)

        with caplog.at_level(logging.WARNING, logger="async_webdriver.core.session"):
            del session
            gc.collect()

        assert "never quit" in caplog.text
        mock_transport.execute.assert_not_called()

    def test_quit_session_not_ended_twice(self, session, mock_transport):
        """A quit session should not schedule anything when collected."""
        session._session_id = ""
        session.__del__()

        mock_transport.execute.assert_not_called()
