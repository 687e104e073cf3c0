"""Desktop implementations of the clipboard and browser ports."""

from __future__ import annotations

import asyncio
import logging
import shutil
import sys
import webbrowser

from app.adapters.base import BrowserAdapter, ClipboardAdapter, ClipboardError
from app.config import settings

logger = logging.getLogger(__name__)

# First available tool wins
_CLIPBOARD_COMMANDS: tuple[list[str], ...] = (
    ["pbcopy"],
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
    ["clip.exe"],
)


def _clipboard_command() -> list[str] | None:
    for cmd in _CLIPBOARD_COMMANDS:
        if shutil.which(cmd[0]):
            return cmd
    return None


class SystemClipboard(ClipboardAdapter):
    """Pipes text into the platform's clipboard tool."""

    def __init__(self, timeout: float = 5.0) -> None:
        self.timeout = timeout

    async def write_text(self, text: str) -> None:
        cmd = _clipboard_command()
        if cmd is None:
            raise ClipboardError(f"No clipboard tool found on {sys.platform}")

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ClipboardError(f"{cmd[0]} failed: {exc}") from exc

        try:
            _, stderr = await asyncio.wait_for(proc.communicate(text.encode()), timeout=self.timeout)
        except TimeoutError as exc:
            proc.kill()
            await proc.wait()
            raise ClipboardError(f"{cmd[0]} timed out after {self.timeout}s") from exc
        except OSError as exc:
            raise ClipboardError(f"{cmd[0]} failed: {exc}") from exc

        if proc.returncode:
            raise ClipboardError(
                f"{cmd[0]} exited {proc.returncode}: {stderr.decode(errors='replace').strip()}"
            )


class SystemBrowser(BrowserAdapter):
    """Opens repo links in a new tab and in-app paths against the web UI."""

    def __init__(self, base_url: str | None = None) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")

    def open_url(self, url: str) -> None:
        if not webbrowser.open(url, new=2):
            logger.warning("No browser available to open %s", url)

    def navigate(self, path: str) -> None:
        self.open_url(f"{self.base_url}{path}")
