"""Value types exchanged with the remote end."""

from __future__ import annotations

from datetime import timedelta
from typing import NewType, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

SessionId = NewType("SessionId", str)
WindowHandle = NewType("WindowHandle", str)

# W3C element reference key for web elements
ELEMENT_KEY = "element-6066-11e4-a52e-4f735466cecf"

Duration = Union[timedelta, int, float]


class Rect(BaseModel):
    """Window or element geometry in CSS pixels."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    height: float


class OptionRect(BaseModel):
    """Partial rectangle for set-window-rect; unset fields are left unchanged."""

    model_config = ConfigDict(frozen=True)

    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_json(self) -> dict:
        return self.model_dump(exclude_none=True)


class NewWindow(BaseModel):
    """Reply to new-window: the handle and the kind of window that was opened."""

    handle: str
    type: Optional[str] = None


class Cookie(BaseModel):
    """
    A cookie as represented on the wire.

    Optional attributes that were absent in the server's JSON stay absent
    when the cookie is serialized again.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    name: str
    value: str
    path: Optional[str] = None
    domain: Optional[str] = None
    secure: Optional[bool] = None
    http_only: Optional[bool] = Field(default=None, alias="httpOnly")
    expiry: Optional[int] = None
    same_site: Optional[str] = Field(default=None, alias="sameSite")

    def to_json(self) -> dict:
        """Serialize using protocol field names, omitting unset attributes."""
        return self.model_dump(by_alias=True, exclude_none=True)


def _to_millis(value: Optional[Duration]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, timedelta):
        return int(value.total_seconds() * 1000)
    return int(value * 1000)


class TimeoutConfiguration(BaseModel):
    """
    Session timeouts in milliseconds.

    Any field left as None is omitted from the request, so a partial
    configuration updates only the given categories.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    script: Optional[int] = None
    page_load: Optional[int] = Field(default=None, alias="pageLoad")
    implicit: Optional[int] = None

    @classmethod
    def from_durations(
        cls,
        script: Optional[Duration] = None,
        page_load: Optional[Duration] = None,
        implicit: Optional[Duration] = None,
    ) -> TimeoutConfiguration:
        """
        Build a configuration from timedeltas or seconds.

        Args:
            script: Script timeout
            page_load: Page load timeout
            implicit: Implicit element wait

        Returns:
            TimeoutConfiguration with the given fields set
        """
        return cls(
            script=_to_millis(script),
            page_load=_to_millis(page_load),
            implicit=_to_millis(implicit),
        )

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
