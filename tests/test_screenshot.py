"""Unit tests for screenshot helpers."""

import base64
from unittest.mock import MagicMock

import anyio
import pytest

from async_webdriver.core.exceptions import DecodeError
from async_webdriver.utils.screenshot import decode_screenshot, write_screenshot

PNG = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


class TestDecodeScreenshot:
    """Tests for decode_screenshot."""

    def test_decode(self):
        assert decode_screenshot(base64.b64encode(PNG).decode()) == PNG

    def test_invalid_base64(self):
        """Invalid base64 should raise DecodeError naming the command."""
        with pytest.raises(DecodeError) as exc:
            decode_screenshot("not base64!!", "takeElementScreenshot")

        assert exc.value.command == "takeElementScreenshot"


class TestWriteScreenshot:
    """Tests for write_screenshot."""

    @pytest.mark.asyncio
    async def test_writes_bytes(self, tmp_path):
        path = tmp_path / "shot.png"

        await write_screenshot(path, PNG)

        assert path.read_bytes() == PNG

    @pytest.mark.asyncio
    async def test_missing_directory(self, tmp_path):
        """Unwritable paths should raise the underlying OSError."""
        with pytest.raises(OSError):
            await write_screenshot(tmp_path / "missing" / "shot.png", PNG)

    @pytest.mark.asyncio
    async def test_handle_released_when_write_fails(self, monkeypatch, tmp_path):
        """A failing write should propagate and still close the file."""
        fp = MagicMock()
        fp.write.side_effect = OSError("No space left on device")

        async def open_failing_file(path, mode):
            return anyio.AsyncFile(fp)

        monkeypatch.setattr(anyio, "open_file", open_failing_file)

        with pytest.raises(OSError, match="No space left"):
            await write_screenshot(tmp_path / "shot.png", PNG)

        fp.write.assert_called_once_with(PNG)
        fp.close.assert_called_once()
