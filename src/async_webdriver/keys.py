"""Symbolic keys and composed typing sequences.

Non-printable keys are sent to the remote end as characters in the Unicode
private-use area ``U+E000``-``U+E03D``. ``TypingData`` strings together
literal text and symbolic keys into the exact character sequence that a
single send-keys or key action should deliver.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator, Union


class Keys(str, Enum):
    """Symbolic keys and their protocol code points."""

    NULL = "\ue000"
    CANCEL = "\ue001"
    HELP = "\ue002"
    BACKSPACE = "\ue003"
    TAB = "\ue004"
    CLEAR = "\ue005"
    RETURN = "\ue006"
    ENTER = "\ue007"
    SHIFT = "\ue008"
    CONTROL = "\ue009"
    ALT = "\ue00a"
    PAUSE = "\ue00b"
    ESCAPE = "\ue00c"
    SPACE = "\ue00d"
    PAGE_UP = "\ue00e"
    PAGE_DOWN = "\ue00f"
    END = "\ue010"
    HOME = "\ue011"
    LEFT = "\ue012"
    UP = "\ue013"
    RIGHT = "\ue014"
    DOWN = "\ue015"
    INSERT = "\ue016"
    DELETE = "\ue017"
    SEMICOLON = "\ue018"
    EQUALS = "\ue019"
    NUMPAD0 = "\ue01a"
    NUMPAD1 = "\ue01b"
    NUMPAD2 = "\ue01c"
    NUMPAD3 = "\ue01d"
    NUMPAD4 = "\ue01e"
    NUMPAD5 = "\ue01f"
    NUMPAD6 = "\ue020"
    NUMPAD7 = "\ue021"
    NUMPAD8 = "\ue022"
    NUMPAD9 = "\ue023"
    MULTIPLY = "\ue024"
    ADD = "\ue025"
    SEPARATOR = "\ue026"
    SUBTRACT = "\ue027"
    DECIMAL = "\ue028"
    DIVIDE = "\ue029"
    F1 = "\ue031"
    F2 = "\ue032"
    F3 = "\ue033"
    F4 = "\ue034"
    F5 = "\ue035"
    F6 = "\ue036"
    F7 = "\ue037"
    F8 = "\ue038"
    F9 = "\ue039"
    F10 = "\ue03a"
    F11 = "\ue03b"
    F12 = "\ue03c"
    META = "\ue03d"
    # Same code point as META, so Enum makes this an alias of that member.
    COMMAND = "\ue03d"

    @property
    def code_point(self) -> int:
        """Integer code point sent for this key."""
        return ord(self.value)

    def with_key(self, other: Keys) -> TypingData:
        """Compose this key followed by ``other``."""
        return TypingData((self.value, other.value))

    def with_text(self, text: str) -> TypingData:
        """Compose this key followed by literal ``text``."""
        return TypingData((self.value, *text))

    def to_typing_data(self) -> TypingData:
        return TypingData((self.value,))


TypingPart = Union[str, Keys, "TypingData"]


class TypingData:
    """
    Immutable ordered sequence of characters to type.

    Every combinator returns a new instance; concatenation is associative,
    so ``a.concat(b).concat(c) == a.concat(b.concat(c))``.
    """

    __slots__ = ("_chars",)

    def __init__(self, chars: Iterable[str] = ()):
        self._chars: tuple[str, ...] = tuple(chars)

    @classmethod
    def from_text(cls, text: str) -> TypingData:
        """Convert a literal string into its sequence of Unicode scalar values."""
        return cls(text)

    @classmethod
    def from_keys(cls, *keys: Keys) -> TypingData:
        return cls(key.value for key in keys)

    @classmethod
    def of(cls, *parts: TypingPart) -> TypingData:
        """
        Build a sequence from mixed parts, in order.

        Args:
            parts: Literal strings, Keys members or other TypingData

        Returns:
            TypingData holding every part's characters
        """
        data = cls()
        for part in parts:
            data = data.concat(to_typing_data(part))
        return data

    def with_key(self, key: Keys) -> TypingData:
        """Append a symbolic key."""
        return TypingData((*self._chars, key.value))

    def with_text(self, text: str) -> TypingData:
        """Append literal text."""
        return TypingData((*self._chars, *text))

    def concat(self, other: TypingData) -> TypingData:
        """Append another sequence, keeping both operands in order."""
        return TypingData(self._chars + other._chars)

    def as_list(self) -> list[str]:
        return list(self._chars)

    def to_string(self) -> str:
        return "".join(self._chars)

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"TypingData({self.to_string()!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self._chars)

    def __len__(self) -> int:
        return len(self._chars)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypingData):
            return self._chars == other._chars
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._chars)


def to_typing_data(part: TypingPart) -> TypingData:
    """Normalize a string, key or sequence into TypingData."""
    if isinstance(part, TypingData):
        return part
    if isinstance(part, Keys):
        return part.to_typing_data()
    if isinstance(part, str):
        return TypingData.from_text(part)
    raise TypeError(f"Cannot type value of type {type(part).__name__}")
