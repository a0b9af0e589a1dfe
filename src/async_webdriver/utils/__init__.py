"""Shared utilities for the async WebDriver client."""

from .error_mapper import map_protocol_error, ErrorCode
from .locators import By, get_by_strategy
from .capabilities import build_capabilities, session_request
from .screenshot import decode_screenshot, write_screenshot

__all__ = [
    "map_protocol_error",
    "ErrorCode",
    "By",
    "get_by_strategy",
    "build_capabilities",
    "session_request",
    "decode_screenshot",
    "write_screenshot",
]
