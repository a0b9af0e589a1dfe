"""HTTP transport that executes commands against a remote end."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

import httpx

from .. import __version__
from .command import Command, CommandKind
from .exceptions import TransportError
from .response import unwrap
from ..utils.error_mapper import is_error_payload

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything that can deliver a Command and return its decoded envelope."""

    async def execute(self, command: Command) -> dict[str, Any]:
        ...


class RemoteConnection:
    """
    Executes commands over HTTP using a shared ``httpx.AsyncClient``.

    One connection may be shared by a session and every element and action
    chain derived from it. The connection does not retry: every failure is
    reported to the caller as a TransportError, except well-formed error
    envelopes, which are returned so the response layer can raise the
    matching ProtocolError.
    """

    def __init__(
        self,
        remote_url: str,
        timeout: float = 120.0,
        auth_token: Optional[str] = None,
        keep_alive: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.remote_url = remote_url.rstrip("/")
        headers = {
            "Accept": "application/json",
            "Content-Type": "application/json;charset=UTF-8",
            "User-Agent": f"async-webdriver/{__version__}",
        }
        if auth_token:
            headers["Authorization"] = f"Bearer {auth_token}"
        if not keep_alive:
            headers["Connection"] = "close"

        self._client = httpx.AsyncClient(
            base_url=self.remote_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def execute(self, command: Command) -> dict[str, Any]:
        """
        Send one command and return the decoded response envelope.

        Args:
            command: Command to execute

        Returns:
            The JSON envelope returned by the remote end

        Raises:
            TransportError: On network failure, a non-JSON body, or a
                non-2xx status without an error envelope
        """
        url = f"{self.remote_url}{command.path}"
        body = None
        if command.method == "POST":
            body = command.body if command.body is not None else {}

        logger.debug(f"{command.method} {command.path} ({command.kind.value})")
        try:
            response = await self._client.request(command.method, command.path, json=body)
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__, url=url) from e

        if not response.content:
            if response.is_success:
                return {"value": None}
            raise TransportError("Empty response body", url=url, status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                "Response body is not valid JSON",
                url=url,
                status_code=response.status_code,
            ) from e

        if response.is_success:
            return data

        if isinstance(data, dict) and is_error_payload(data.get("value")):
            logger.debug(
                f"{command.kind.value} failed with '{data['value']['error']}' "
                f"(HTTP {response.status_code})"
            )
            return data

        logger.warning(f"{command.kind.value} failed with HTTP {response.status_code}")
        raise TransportError(
            response.reason_phrase or "Request failed",
            url=url,
            status_code=response.status_code,
        )

    async def status(self) -> dict:
        """Query the remote end's readiness via the status endpoint."""
        command = Command(CommandKind.STATUS)
        return unwrap(await self.execute(command), command=command)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> RemoteConnection:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
