"""Factory for opening configured sessions on a remote end."""

from __future__ import annotations

import logging
from typing import Optional

from .connection import Transport
from .exceptions import WebDriverClientError
from .session import RemoteSession
from .types import OptionRect, TimeoutConfiguration
from ..config import Settings
from ..utils.capabilities import build_capabilities

logger = logging.getLogger(__name__)


class SessionFactory:
    """
    Creates RemoteSession instances with default timeouts applied.

    The remote URL, default browser and timeouts come from ``Settings``.
    Every session the factory returns has had its timeouts pushed to the
    remote end already.
    """

    def __init__(
        self,
        remote_url: str,
        browser: str = "chrome",
        headless: bool = True,
        page_load_timeout: float = 30,
        script_timeout: float = 30,
        implicit_wait: float = 0,
        request_timeout: float = 120.0,
        auth_token: Optional[str] = None,
        keep_alive: bool = True,
        transport: Optional[Transport] = None,
    ):
        self.remote_url = remote_url
        self.browser = browser
        self.headless = headless
        self.page_load_timeout = page_load_timeout
        self.script_timeout = script_timeout
        self.implicit_wait = implicit_wait
        self.request_timeout = request_timeout
        self.auth_token = auth_token
        self.keep_alive = keep_alive
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[Transport] = None
    ) -> SessionFactory:
        return cls(
            remote_url=settings.remote_url,
            browser=settings.default_browser,
            headless=settings.headless,
            page_load_timeout=settings.page_load_timeout_seconds,
            script_timeout=settings.script_timeout_seconds,
            implicit_wait=settings.implicit_wait_seconds,
            request_timeout=settings.request_timeout_seconds,
            auth_token=settings.get_auth_token(),
            keep_alive=settings.keep_alive,
            transport=transport,
        )

    async def create(
        self,
        browser: Optional[str] = None,
        headless: Optional[bool] = None,
        viewport_width: Optional[int] = None,
        viewport_height: Optional[int] = None,
        extra_capabilities: Optional[dict] = None,
    ) -> RemoteSession:
        """
        Open a new session on the remote end.

        Args:
            browser: Browser type (chrome, firefox, edge); defaults to the
                factory browser
            headless: Run browser in headless mode; defaults to the
                factory setting
            viewport_width: Optional viewport width
            viewport_height: Optional viewport height
            extra_capabilities: Additional capabilities to pass to the browser

        Returns:
            Configured RemoteSession

        Raises:
            ValueError: If browser type is not supported
            WebDriverClientError: If the session cannot be created or set up
        """
        window_size = None
        if viewport_width and viewport_height:
            window_size = (viewport_width, viewport_height)

        capabilities = build_capabilities(
            browser=browser or self.browser,
            headless=self.headless if headless is None else headless,
            window_size=window_size,
            extra_capabilities=extra_capabilities,
        )

        session = await RemoteSession.create(
            self.remote_url,
            capabilities,
            transport=self._transport,
            timeout=self.request_timeout,
            auth_token=self.auth_token,
            keep_alive=self.keep_alive,
        )

        try:
            # Configure timeouts
            await session.set_timeouts(
                TimeoutConfiguration.from_durations(
                    script=self.script_timeout,
                    page_load=self.page_load_timeout,
                    implicit=self.implicit_wait,
                )
            )

            # Set viewport if specified
            if window_size:
                await session.set_window_rect(
                    OptionRect(width=window_size[0], height=window_size[1])
                )

        except WebDriverClientError:
            logger.warning(f"Setup failed for session {session.session_id}, quitting it")
            try:
                await session.quit()
            except WebDriverClientError as e:
                logger.warning(f"Error quitting session after failed setup: {e}")
            raise

        return session
