"""Remote element handles."""

from __future__ import annotations

from os import PathLike
from typing import Any, Mapping, Optional, Union

from .command import Command, CommandKind
from .connection import Transport
from .exceptions import DecodeError
from .response import unwrap
from .types import ELEMENT_KEY, Rect, SessionId
from ..keys import TypingPart, TypingData
from ..utils.locators import Selector
from ..utils.screenshot import decode_screenshot, write_screenshot

# Key used by pre-W3C remote ends
LEGACY_ELEMENT_KEY = "ELEMENT"


class WebElement:
    """
    A reference to a DOM node held by the remote end.

    The handle stores only the element id, a copy of the owning session id
    and the shared transport. Nothing is cached: every read is a new
    command, so two handles for the same node never disagree. Once the node
    leaves the DOM, commands fail with StaleElementReferenceError.
    """

    def __init__(self, element_id: str, session_id: SessionId, transport: Transport):
        self.element_id = element_id
        self.session_id = session_id
        self._transport = transport

    async def _execute(
        self,
        kind: CommandKind,
        body: Optional[dict] = None,
        **params: str,
    ) -> Any:
        command = Command(
            kind,
            self.session_id,
            params={"element_id": self.element_id, **params},
            body=body,
        )
        return unwrap(await self._transport.execute(command), command=command)

    async def click(self) -> None:
        await self._execute(CommandKind.ELEMENT_CLICK)

    async def clear(self) -> None:
        await self._execute(CommandKind.ELEMENT_CLEAR)

    async def send_keys(self, *values: TypingPart) -> None:
        """
        Type into the element.

        Args:
            values: Literal strings, Keys members or TypingData, sent as one
                sequence in the given order
        """
        text = TypingData.of(*values).to_string()
        await self._execute(
            CommandKind.ELEMENT_SEND_KEYS,
            body={"text": text, "value": list(text)},
        )

    async def text(self) -> str:
        """Visible text of the element."""
        return await self._execute(CommandKind.GET_ELEMENT_TEXT)

    async def tag_name(self) -> str:
        return await self._execute(CommandKind.GET_ELEMENT_TAG_NAME)

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self._execute(CommandKind.GET_ELEMENT_ATTRIBUTE, name=name)

    async def get_property(self, name: str) -> Any:
        value = await self._execute(CommandKind.GET_ELEMENT_PROPERTY, name=name)
        return wrap_script_result(value, self._transport, self.session_id)

    async def value_of_css_property(self, name: str) -> str:
        return await self._execute(CommandKind.GET_ELEMENT_CSS_VALUE, name=name)

    async def rect(self) -> Rect:
        return await self._execute(CommandKind.GET_ELEMENT_RECT)

    async def is_selected(self) -> bool:
        return await self._execute(CommandKind.IS_ELEMENT_SELECTED)

    async def is_enabled(self) -> bool:
        return await self._execute(CommandKind.IS_ELEMENT_ENABLED)

    async def find_element(self, selector: Selector) -> WebElement:
        """Find the first descendant matching ``selector``."""
        ref = await self._execute(
            CommandKind.FIND_ELEMENT_FROM_ELEMENT, body=selector.to_json()
        )
        return unwrap_element(ref, self._transport, self.session_id)

    async def find_elements(self, selector: Selector) -> list[WebElement]:
        """Find all descendants matching ``selector``."""
        refs = await self._execute(
            CommandKind.FIND_ELEMENTS_FROM_ELEMENT, body=selector.to_json()
        )
        return unwrap_elements(refs, self._transport, self.session_id)

    async def screenshot_as_base64(self) -> str:
        return await self._execute(CommandKind.TAKE_ELEMENT_SCREENSHOT)

    async def screenshot_as_png(self) -> bytes:
        data = await self.screenshot_as_base64()
        return decode_screenshot(data, CommandKind.TAKE_ELEMENT_SCREENSHOT.value)

    async def screenshot(self, path: Union[str, PathLike]) -> None:
        """Save a PNG of just this element to ``path``."""
        await write_screenshot(path, await self.screenshot_as_png())

    def to_json(self) -> dict[str, str]:
        """Element reference for use as a script argument."""
        return {ELEMENT_KEY: self.element_id}

    def __eq__(self, other: object) -> bool:
        if isinstance(other, WebElement):
            return (self.session_id, self.element_id) == (other.session_id, other.element_id)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.session_id, self.element_id))

    def __repr__(self) -> str:
        return f"WebElement(element_id={self.element_id!r}, session_id={self.session_id!r})"


def _element_id(
    ref: Any, keys: tuple[str, ...] = (ELEMENT_KEY, LEGACY_ELEMENT_KEY)
) -> Optional[str]:
    if not isinstance(ref, Mapping):
        return None
    for key in keys:
        value = ref.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def unwrap_element(ref: Any, transport: Transport, session_id: SessionId) -> WebElement:
    """
    Wrap an element reference returned by the remote end.

    Raises:
        DecodeError: If ``ref`` is not an element reference
    """
    element_id = _element_id(ref)
    if element_id is None:
        raise DecodeError("findElement", "value is not an element reference", value=ref)
    return WebElement(element_id, session_id, transport)


def unwrap_elements(refs: Any, transport: Transport, session_id: SessionId) -> list[WebElement]:
    """Wrap a list of element references, keeping their order."""
    if not isinstance(refs, list):
        raise DecodeError("findElements", "value is not a list", value=refs)
    return [unwrap_element(ref, transport, session_id) for ref in refs]


def to_script_arg(value: Any) -> Any:
    """Replace WebElement handles inside a script argument with references."""
    if isinstance(value, WebElement):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [to_script_arg(item) for item in value]
    if isinstance(value, Mapping):
        return {key: to_script_arg(item) for key, item in value.items()}
    return value


def wrap_script_result(value: Any, transport: Transport, session_id: SessionId) -> Any:
    """
    Turn element references inside a script result into WebElement handles.

    Only the W3C element key is recognised here. A script may legitimately
    return a plain object with an ``ELEMENT`` property, so the legacy key is
    accepted only for find results.
    """
    if isinstance(value, list):
        return [wrap_script_result(item, transport, session_id) for item in value]
    if isinstance(value, Mapping):
        element_id = _element_id(value, (ELEMENT_KEY,)) if len(value) == 1 else None
        if element_id is not None:
            return WebElement(element_id, session_id, transport)
        return {
            key: wrap_script_result(item, transport, session_id)
            for key, item in value.items()
        }
    return value
