"""Compose pointer and keyboard input into one atomic action sequence."""

from __future__ import annotations

import logging
from typing import Optional, Union

from .command import Command, CommandKind
from .connection import Transport
from .element import WebElement
from .response import unwrap
from .types import SessionId
from ..keys import Keys, TypingData, TypingPart

logger = logging.getLogger(__name__)

# Mouse buttons
LEFT_BUTTON = 0
MIDDLE_BUTTON = 1
RIGHT_BUTTON = 2

KEYBOARD_ID = "keyboard"
MOUSE_ID = "mouse"
DEFAULT_MOVE_DURATION_MS = 250


def _pause(duration: int = 0) -> dict:
    return {"type": "pause", "duration": duration}


def _key_value(key: Union[Keys, str]) -> str:
    value = key.value if isinstance(key, Keys) else key
    if len(value) != 1:
        raise ValueError(f"Key actions take a single character, got {value!r}")
    return value


class ActionChain:
    """
    Builder for a multi-step input gesture.

    Steps are recorded locally and sent with a single perform-actions
    command, so the remote end runs the whole gesture as one sequence.
    Keyboard and pointer steps are kept tick-aligned: every step on one
    device adds a zero-length pause to the other.

    Example::

        await (
            session.action_chain()
            .key_down(Keys.CONTROL)
            .send_keys("a")
            .key_up(Keys.CONTROL)
            .perform()
        )
    """

    def __init__(self, transport: Transport, session_id: SessionId):
        self.session_id = session_id
        self._transport = transport
        self._key_actions: list[dict] = []
        self._pointer_actions: list[dict] = []

    def _add_key(self, action: dict) -> ActionChain:
        self._key_actions.append(action)
        self._pointer_actions.append(_pause())
        return self

    def _add_pointer(self, action: dict) -> ActionChain:
        self._pointer_actions.append(action)
        self._key_actions.append(_pause())
        return self

    def key_down(self, key: Union[Keys, str]) -> ActionChain:
        return self._add_key({"type": "keyDown", "value": _key_value(key)})

    def key_up(self, key: Union[Keys, str]) -> ActionChain:
        return self._add_key({"type": "keyUp", "value": _key_value(key)})

    def send_keys(self, *values: TypingPart) -> ActionChain:
        """Press and release every character of the composed sequence in order."""
        for char in TypingData.of(*values):
            self.key_down(char)
            self.key_up(char)
        return self

    def move_to(
        self, x: int, y: int, duration: int = DEFAULT_MOVE_DURATION_MS
    ) -> ActionChain:
        """Move the pointer to viewport coordinates."""
        return self._add_pointer(
            {"type": "pointerMove", "duration": duration, "origin": "viewport", "x": x, "y": y}
        )

    def move_by_offset(
        self, x_offset: int, y_offset: int, duration: int = DEFAULT_MOVE_DURATION_MS
    ) -> ActionChain:
        """Move the pointer relative to its current position."""
        return self._add_pointer(
            {
                "type": "pointerMove",
                "duration": duration,
                "origin": "pointer",
                "x": x_offset,
                "y": y_offset,
            }
        )

    def move_to_element(
        self,
        element: WebElement,
        x_offset: int = 0,
        y_offset: int = 0,
        duration: int = DEFAULT_MOVE_DURATION_MS,
    ) -> ActionChain:
        """Move the pointer to the centre of ``element``, plus an optional offset."""
        return self._add_pointer(
            {
                "type": "pointerMove",
                "duration": duration,
                "origin": element.to_json(),
                "x": x_offset,
                "y": y_offset,
            }
        )

    def pointer_down(self, button: int = LEFT_BUTTON) -> ActionChain:
        return self._add_pointer({"type": "pointerDown", "button": button})

    def pointer_up(self, button: int = LEFT_BUTTON) -> ActionChain:
        return self._add_pointer({"type": "pointerUp", "button": button})

    def click_and_hold(self, element: Optional[WebElement] = None) -> ActionChain:
        if element is not None:
            self.move_to_element(element)
        return self.pointer_down()

    def release(self, element: Optional[WebElement] = None) -> ActionChain:
        if element is not None:
            self.move_to_element(element)
        return self.pointer_up()

    def click(self, element: Optional[WebElement] = None) -> ActionChain:
        if element is not None:
            self.move_to_element(element)
        return self.pointer_down().pointer_up()

    def double_click(self, element: Optional[WebElement] = None) -> ActionChain:
        return self.click(element).click()

    def context_click(self, element: Optional[WebElement] = None) -> ActionChain:
        if element is not None:
            self.move_to_element(element)
        return self.pointer_down(RIGHT_BUTTON).pointer_up(RIGHT_BUTTON)

    def drag_and_drop(self, source: WebElement, target: WebElement) -> ActionChain:
        return self.click_and_hold(source).move_to_element(target).release()

    def drag_and_drop_by_offset(
        self, source: WebElement, x_offset: int, y_offset: int
    ) -> ActionChain:
        return self.click_and_hold(source).move_by_offset(x_offset, y_offset).release()

    def pause(self, seconds: float) -> ActionChain:
        """Wait for ``seconds`` before the next step."""
        duration = int(seconds * 1000)
        self._key_actions.append(_pause(duration))
        self._pointer_actions.append(_pause(duration))
        return self

    @property
    def step_count(self) -> int:
        """Number of ticks recorded so far."""
        return len(self._key_actions)

    def to_json(self) -> dict:
        """Body of the perform-actions command."""
        return {
            "actions": [
                {"type": "key", "id": KEYBOARD_ID, "actions": list(self._key_actions)},
                {
                    "type": "pointer",
                    "id": MOUSE_ID,
                    "parameters": {"pointerType": "mouse"},
                    "actions": list(self._pointer_actions),
                },
            ]
        }

    def clear(self) -> None:
        """Forget every recorded step."""
        self._key_actions.clear()
        self._pointer_actions.clear()

    async def perform(self) -> None:
        """Send the recorded gesture as one command, then start a fresh sequence."""
        if not self._key_actions:
            return
        command = Command(CommandKind.PERFORM_ACTIONS, self.session_id, body=self.to_json())
        logger.debug(f"Performing {self.step_count} action tick(s)")
        try:
            unwrap(await self._transport.execute(command), command=command)
        finally:
            self.clear()

    async def reset(self) -> None:
        """Release every key and button the remote end considers held."""
        command = Command(CommandKind.RELEASE_ACTIONS, self.session_id)
        unwrap(await self._transport.execute(command), command=command)
        self.clear()
