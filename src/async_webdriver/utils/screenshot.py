"""Screenshot decoding and file output."""

import base64
import binascii
import logging
from os import PathLike
from typing import Union

import anyio

from ..core.exceptions import DecodeError

logger = logging.getLogger(__name__)


def decode_screenshot(data: str, command: str = "takeScreenshot") -> bytes:
    """
    Decode a base64 screenshot payload into raw image bytes.

    Args:
        data: Base64 text from the response ``value``
        command: Name of the command that produced it, for error context

    Returns:
        Decoded image bytes (PNG for conforming remote ends)

    Raises:
        DecodeError: If the text is not valid base64
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(command, f"invalid base64 screenshot: {e}", value=data) from e


async def write_screenshot(path: Union[str, PathLike], png: bytes) -> None:
    """
    Write image bytes to ``path``.

    The file handle is closed on every exit path, including a failed write.
    """
    async with await anyio.open_file(path, "wb") as f:
        await f.write(png)
    logger.debug(f"Wrote screenshot ({len(png)} bytes) to {path}")
