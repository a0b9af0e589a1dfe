"""Switch the session's browsing context and handle user prompts."""

from __future__ import annotations

from typing import Any, Literal, Optional, Union

from .command import Command, CommandKind
from .connection import Transport
from .element import WebElement, unwrap_element
from .response import unwrap
from .types import SessionId, WindowHandle


class SwitchTo:
    """Commands that change which window, frame or prompt the session targets."""

    def __init__(self, transport: Transport, session_id: SessionId):
        self.session_id = session_id
        self._transport = transport

    async def _execute(self, kind: CommandKind, body: Optional[dict] = None) -> Any:
        command = Command(kind, self.session_id, body=body)
        return unwrap(await self._transport.execute(command), command=command)

    async def window(self, handle: WindowHandle) -> None:
        await self._execute(CommandKind.SWITCH_TO_WINDOW, {"handle": handle})

    async def new_window(self, kind: Literal["tab", "window"] = "tab") -> WindowHandle:
        """
        Open a new tab or window without switching to it.

        Returns:
            Handle of the new window
        """
        result = await self._execute(CommandKind.NEW_WINDOW, {"type": kind})
        return WindowHandle(result.handle)

    async def frame(self, reference: Union[None, int, WebElement]) -> None:
        """
        Switch to a frame.

        Args:
            reference: Frame index, frame element, or None for the top-level
                browsing context
        """
        if isinstance(reference, WebElement):
            frame_id: Any = reference.to_json()
        else:
            frame_id = reference
        await self._execute(CommandKind.SWITCH_TO_FRAME, {"id": frame_id})

    async def default_content(self) -> None:
        await self.frame(None)

    async def parent_frame(self) -> None:
        await self._execute(CommandKind.SWITCH_TO_PARENT_FRAME)

    async def active_element(self) -> WebElement:
        ref = await self._execute(CommandKind.GET_ACTIVE_ELEMENT)
        return unwrap_element(ref, self._transport, self.session_id)

    async def alert_text(self) -> Optional[str]:
        return await self._execute(CommandKind.GET_ALERT_TEXT)

    async def accept_alert(self) -> None:
        await self._execute(CommandKind.ACCEPT_ALERT)

    async def dismiss_alert(self) -> None:
        await self._execute(CommandKind.DISMISS_ALERT)

    async def send_alert_text(self, text: str) -> None:
        await self._execute(CommandKind.SEND_ALERT_TEXT, {"text": text})
