"""Remote browser sessions."""

from __future__ import annotations

import asyncio
import copy
import logging
from os import PathLike
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from .actions import ActionChain
from .command import Command, CommandKind
from .connection import RemoteConnection, Transport
from .element import (
    WebElement,
    to_script_arg,
    unwrap_element,
    unwrap_elements,
    wrap_script_result,
)
from .exceptions import InitializationError, SessionClosedError
from .response import unwrap
from .switch_to import SwitchTo
from .types import (
    Cookie,
    Duration,
    OptionRect,
    Rect,
    SessionId,
    TimeoutConfiguration,
    WindowHandle,
)
from ..utils.capabilities import session_request
from ..utils.error_mapper import is_error_payload, map_protocol_error
from ..utils.locators import Selector
from ..utils.screenshot import decode_screenshot, write_screenshot

logger = logging.getLogger(__name__)

# Detached end-session tasks scheduled by garbage-collected sessions. Held
# here so the event loop does not drop them before they finish.
_background_tasks: set[asyncio.Task] = set()


def _first_non_empty(*candidates: Any, kind: type) -> Any:
    for candidate in candidates:
        if isinstance(candidate, kind) and candidate:
            return candidate
    return None


def resolve_new_session(envelope: Any) -> tuple[SessionId, dict]:
    """
    Extract the session id and negotiated capabilities from a new-session reply.

    Remote ends disagree on where these live: some put ``sessionId`` and
    ``capabilities`` at the top level, others nest them under ``value``.
    A non-empty top-level field wins over the nested one.

    Args:
        envelope: Decoded new-session response

    Returns:
        Tuple of (session id, capabilities)

    Raises:
        ProtocolError: If the remote end reported an error
        InitializationError: If no session id is present in either place
    """
    if not isinstance(envelope, Mapping):
        raise InitializationError("response is not a JSON object", response=envelope)

    value = envelope.get("value")
    if is_error_payload(value):
        raise map_protocol_error(value)
    nested = value if isinstance(value, Mapping) else {}

    session_id = _first_non_empty(envelope.get("sessionId"), nested.get("sessionId"), kind=str)
    if session_id is None:
        raise InitializationError("no session id in response", response=envelope)

    capabilities = _first_non_empty(
        envelope.get("capabilities"), nested.get("capabilities"), kind=Mapping
    )
    return SessionId(session_id), copy.deepcopy(dict(capabilities or {}))


async def _quit_detached(
    transport: Transport,
    session_id: SessionId,
    connection: Optional[RemoteConnection],
) -> None:
    """End a session nobody holds any more; failures are logged, never raised."""
    command = Command(CommandKind.DELETE_SESSION, session_id)
    try:
        unwrap(await transport.execute(command), command=command)
        logger.info(f"Closed abandoned session {session_id}")
    except Exception as e:
        logger.error(f"Error closing abandoned session {session_id}: {e}")
    finally:
        if connection is not None:
            await connection.aclose()


class RemoteSession:
    """
    A live session on a remote WebDriver endpoint.

    Create one with ``await RemoteSession.create(...)`` and end it with
    ``await session.quit()``, or use it as an async context manager::

        async with await RemoteSession.create(url, build_capabilities()) as session:
            await session.get("https://example.com")

    Every method sends exactly one command (the screenshot file helpers add
    local decoding and file output). Concurrent calls on one session are
    allowed; their ordering is up to the remote end.

    A session that is garbage-collected without ``quit()`` schedules a
    fire-and-forget end-session task on the running event loop. That path is
    best effort only: if it fails, or if no loop is running, the outcome is
    only visible in the logs.
    """

    def __init__(
        self,
        session_id: SessionId,
        capabilities: Mapping[str, Any],
        transport: Transport,
        connection: Optional[RemoteConnection] = None,
    ):
        if not session_id:
            raise InitializationError("session id must not be empty")
        self._session_id = session_id
        self._capabilities = MappingProxyType(copy.deepcopy(dict(capabilities)))
        self._transport = transport
        # Connection created by create(), closed together with the session
        self._connection = connection

    @classmethod
    async def create(
        cls,
        remote_url: str,
        capabilities: Mapping[str, Any],
        transport: Optional[Transport] = None,
        timeout: float = 120.0,
        auth_token: Optional[str] = None,
        keep_alive: bool = True,
    ) -> RemoteSession:
        """
        Open a new session with the new-session handshake.

        Args:
            remote_url: Base URL of the remote end (e.g. a Selenium Grid hub)
            capabilities: Desired capabilities, or a complete new-session body
            transport: Transport to use instead of a new RemoteConnection
            timeout: HTTP timeout per command, in seconds
            auth_token: Optional bearer token for the remote end
            keep_alive: Reuse HTTP connections between commands

        Returns:
            The new session

        Raises:
            TransportError: If the remote end cannot be reached
            SessionNotCreatedError: If the remote end refused the session
            InitializationError: If the reply carries no session id
        """
        connection = None
        if transport is None:
            connection = RemoteConnection(
                remote_url, timeout=timeout, auth_token=auth_token, keep_alive=keep_alive
            )
            transport = connection

        command = Command(CommandKind.NEW_SESSION, body=session_request(capabilities))
        try:
            session_id, negotiated = resolve_new_session(await transport.execute(command))
        except Exception:
            if connection is not None:
                await connection.aclose()
            raise

        browser = negotiated.get("browserName", "unknown browser")
        logger.info(f"Created session {session_id} ({browser})")
        return cls(session_id, negotiated, transport, connection=connection)

    @property
    def session_id(self) -> SessionId:
        """Remote session id; empty once the session has been quit."""
        return self._session_id

    @property
    def capabilities(self) -> Mapping[str, Any]:
        """Capabilities negotiated by the remote end (read-only)."""
        return self._capabilities

    @property
    def is_active(self) -> bool:
        return bool(self._session_id)

    def _require_session(self) -> SessionId:
        if not self._session_id:
            raise SessionClosedError()
        return self._session_id

    async def _execute(
        self,
        kind: CommandKind,
        body: Optional[dict] = None,
        **params: str,
    ) -> Any:
        command = Command(kind, self._require_session(), params=params, body=body)
        return unwrap(await self._transport.execute(command), command=command)

    # Navigation

    async def get(self, url: str) -> None:
        """Navigate to ``url`` and wait for the page load strategy to complete."""
        await self._execute(CommandKind.NAVIGATE_TO, {"url": url})

    async def current_url(self) -> str:
        return await self._execute(CommandKind.GET_CURRENT_URL)

    async def page_source(self) -> str:
        return await self._execute(CommandKind.GET_PAGE_SOURCE)

    async def title(self) -> str:
        return await self._execute(CommandKind.GET_TITLE)

    async def back(self) -> None:
        await self._execute(CommandKind.BACK)

    async def forward(self) -> None:
        await self._execute(CommandKind.FORWARD)

    async def refresh(self) -> None:
        await self._execute(CommandKind.REFRESH)

    # Elements

    async def find_element(self, selector: Selector) -> WebElement:
        """
        Find the first element matching ``selector``.

        Raises:
            NoSuchElementError: If nothing matches
        """
        ref = await self._execute(CommandKind.FIND_ELEMENT, selector.to_json())
        return unwrap_element(ref, self._transport, self._session_id)

    async def find_elements(self, selector: Selector) -> list[WebElement]:
        """Find all elements matching ``selector``, in document order."""
        refs = await self._execute(CommandKind.FIND_ELEMENTS, selector.to_json())
        return unwrap_elements(refs, self._transport, self._session_id)

    # Scripts

    async def execute_script(self, script: str, *args: Any) -> Any:
        """
        Run JavaScript synchronously in the current browsing context.

        WebElement arguments are passed as element references, and element
        references in the result come back as WebElement handles.
        """
        value = await self._execute(
            CommandKind.EXECUTE_SCRIPT,
            {"script": script, "args": to_script_arg(list(args))},
        )
        return wrap_script_result(value, self._transport, self._session_id)

    async def execute_async_script(self, script: str, *args: Any) -> Any:
        """Run JavaScript that reports its result through the final callback argument."""
        value = await self._execute(
            CommandKind.EXECUTE_ASYNC_SCRIPT,
            {"script": script, "args": to_script_arg(list(args))},
        )
        return wrap_script_result(value, self._transport, self._session_id)

    # Windows

    async def current_window_handle(self) -> WindowHandle:
        return WindowHandle(await self._execute(CommandKind.GET_WINDOW_HANDLE))

    async def window_handles(self) -> list[WindowHandle]:
        handles = await self._execute(CommandKind.GET_WINDOW_HANDLES)
        return [WindowHandle(handle) for handle in handles]

    async def maximize_window(self) -> None:
        await self._execute(CommandKind.MAXIMIZE_WINDOW)

    async def minimize_window(self) -> None:
        await self._execute(CommandKind.MINIMIZE_WINDOW)

    async def fullscreen_window(self) -> None:
        await self._execute(CommandKind.FULLSCREEN_WINDOW)

    async def get_window_rect(self) -> Rect:
        return await self._execute(CommandKind.GET_WINDOW_RECT)

    async def set_window_rect(self, rect: OptionRect) -> Rect:
        """
        Move and/or resize the current window.

        Fields left unset in ``rect`` keep their current value.

        Returns:
            The window rectangle after the change
        """
        return await self._execute(CommandKind.SET_WINDOW_RECT, rect.to_json())

    async def close(self) -> list[WindowHandle]:
        """
        Close the current window.

        The session stays open; closing the last window typically ends it
        on the remote end, but ``quit()`` is still needed locally.

        Returns:
            Handles of the windows that remain open
        """
        handles = await self._execute(CommandKind.CLOSE_WINDOW)
        logger.debug(f"Closed window in session {self._session_id} ({len(handles)} left)")
        return [WindowHandle(handle) for handle in handles]

    @property
    def switch_to(self) -> SwitchTo:
        return SwitchTo(self._transport, self._require_session())

    # Timeouts

    async def get_timeouts(self) -> TimeoutConfiguration:
        return await self._execute(CommandKind.GET_TIMEOUTS)

    async def set_timeouts(self, timeouts: TimeoutConfiguration) -> None:
        """Update only the timeout categories set in ``timeouts``."""
        await self._execute(CommandKind.SET_TIMEOUTS, timeouts.to_json())

    async def implicitly_wait(self, time_to_wait: Duration) -> None:
        await self.set_timeouts(TimeoutConfiguration.from_durations(implicit=time_to_wait))

    async def set_script_timeout(self, time_to_wait: Duration) -> None:
        await self.set_timeouts(TimeoutConfiguration.from_durations(script=time_to_wait))

    async def set_page_load_timeout(self, time_to_wait: Duration) -> None:
        await self.set_timeouts(TimeoutConfiguration.from_durations(page_load=time_to_wait))

    # Input

    def action_chain(self) -> ActionChain:
        """Start a new, empty action sequence for this session."""
        return ActionChain(self._transport, self._require_session())

    # Cookies

    async def get_cookies(self) -> list[Cookie]:
        return await self._execute(CommandKind.GET_ALL_COOKIES)

    async def get_cookie(self, name: str) -> Cookie:
        """
        Get a cookie by name.

        Raises:
            NoSuchCookieError: If no cookie has that name
        """
        return await self._execute(CommandKind.GET_NAMED_COOKIE, name=name)

    async def add_cookie(self, cookie: Union[Cookie, Mapping[str, Any]]) -> None:
        if not isinstance(cookie, Cookie):
            cookie = Cookie.model_validate(cookie)
        await self._execute(CommandKind.ADD_COOKIE, {"cookie": cookie.to_json()})

    async def delete_cookie(self, name: str) -> None:
        await self._execute(CommandKind.DELETE_COOKIE, name=name)

    async def delete_all_cookies(self) -> None:
        await self._execute(CommandKind.DELETE_ALL_COOKIES)

    # Screenshots

    async def screenshot_as_base64(self) -> str:
        return await self._execute(CommandKind.TAKE_SCREENSHOT)

    async def screenshot_as_png(self) -> bytes:
        return decode_screenshot(await self.screenshot_as_base64())

    async def screenshot(self, path: Union[str, PathLike]) -> None:
        """Save a PNG screenshot of the current viewport to ``path``."""
        await write_screenshot(path, await self.screenshot_as_png())

    # Lifecycle

    async def quit(self) -> None:
        """
        End the remote session.

        The session is marked closed before the command is sent, so the
        end-session command is issued at most once even if it fails.
        Calling quit() again is a no-op.
        """
        session_id = self._session_id
        if not session_id:
            return
        self._session_id = ""

        command = Command(CommandKind.DELETE_SESSION, session_id)
        try:
            unwrap(await self._transport.execute(command), command=command)
            logger.info(f"Closed session {session_id}")
        finally:
            if self._connection is not None:
                await self._connection.aclose()

    async def __aenter__(self) -> RemoteSession:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.quit()

    def __del__(self) -> None:
        session_id = getattr(self, "_session_id", "")
        if not session_id:
            return
        self._session_id = ""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(
                f"Session {session_id} was never quit and no event loop is running; "
                f"the remote session stays open until it times out"
            )
            return

        task = loop.create_task(_quit_detached(self._transport, session_id, self._connection))
        _background_tasks.add(task)
        task.add_done_callback(_background_tasks.discard)

    def __repr__(self) -> str:
        return f"RemoteSession(session_id={self._session_id!r})"
