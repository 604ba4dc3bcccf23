"""
Clipboard access through platform command line tools.

Each provider shells out to the tool that owns the clipboard on that platform
(pbcopy, wl-copy, xsel, xclip, Klipper, PowerShell). ``provide`` picks the
first one that is usable on the current system.
"""

import logging
import os
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List

from .errors import ClipboardError

logger = logging.getLogger(__name__)


class Clipboard:
    """Base class for clipboard providers."""

    name = "clipboard"
    copy_cmd: List[str] = []
    paste_cmd: List[str] = []

    def copy(self, text: str) -> None:
        self._put(self.copy_cmd, text)

    def paste(self) -> str:
        return self._eat(self.paste_cmd)

    def _run(self, cmd: List[str], input_text: str | None = None) -> str:
        try:
            process = subprocess.run(
                cmd,
                input=input_text,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise ClipboardError(f"unable to run {cmd[0]}: {e}") from e

        if process.returncode != 0:
            raise ClipboardError(
                f"{cmd[0]} exited with status {process.returncode}: {process.stderr.strip()}"
            )
        return process.stdout

    def _eat(self, cmd: List[str]) -> str:
        """Run cmd and return what it wrote to stdout."""
        return self._run(cmd)

    def _put(self, cmd: List[str], text: str) -> None:
        """Run cmd with text on stdin."""
        self._run(cmd, input_text=text)


class PbCopy(Clipboard):
    name = "pbcopy"
    copy_cmd = ["pbcopy"]
    paste_cmd = ["pbpaste", "-Prefer", "txt"]


class XClip(Clipboard):
    name = "xclip"
    copy_cmd = ["xclip", "-selection", "c"]
    paste_cmd = ["xclip", "-selection", "c", "-o"]


class XSel(Clipboard):
    name = "xsel"
    copy_cmd = ["xsel", "-b", "-i"]
    paste_cmd = ["xsel", "-b", "-o"]


class Wayland(Clipboard):
    name = "wayland"
    copy_cmd = ["wl-copy", "-p"]
    paste_cmd = ["wl-paste", "-n", "-p"]

    def copy(self, text: str) -> None:
        if text:
            self._put(self.copy_cmd, text)
        else:
            self._run(["wl-copy", "-p", "--clear"])


class Klipper(Clipboard):
    name = "klipper"

    def copy(self, text: str) -> None:
        self._run(["qdbus", "org.kde.klipper", "/klipper", "setClipboardContents", text])

    def paste(self) -> str:
        text = self._eat(["qdbus", "org.kde.klipper", "/klipper", "getClipboardContents"])
        # qdbus appends a newline
        if text.endswith("\n"):
            text = text[:-1]
        return text


class PowerShell(Clipboard):
    """Windows clipboard, also used from WSL."""

    name = "powershell"
    copy_cmd = ["clip.exe"]
    paste_cmd = ["powershell.exe", "-noprofile", "-command", "Get-Clipboard"]

    def paste(self) -> str:
        text = self._eat(self.paste_cmd)
        if text.endswith("\r\n"):
            text = text[:-2]
        elif text.endswith("\n"):
            text = text[:-1]
        return text


def has(command: str) -> bool:
    """True if command is on PATH."""
    return shutil.which(command) is not None


def wsl() -> bool:
    """True when running under Windows Subsystem for Linux."""
    try:
        version = Path("/proc/version").read_text()
    except OSError:
        return False
    return "microsoft" in version.lower()


def provide() -> Clipboard:
    """
    Pick the clipboard provider for this system.

    Raises:
        ClipboardError: No provider is available
    """
    if sys.platform == "darwin":
        provider = PbCopy()
    elif sys.platform == "win32" or wsl():
        provider = PowerShell()
    elif "WAYLAND_DISPLAY" in os.environ:
        provider = Wayland()
    elif has("xsel"):
        provider = XSel()
    elif has("xclip"):
        provider = XClip()
    elif has("klipper") and has("qdbus"):
        provider = Klipper()
    else:
        raise ClipboardError("no clipboard provider available")

    logger.debug(f"Using {provider.name} clipboard provider")
    return provider


def clipboard_url(provider: Clipboard) -> str | None:
    """Paste from the clipboard, None if it holds only whitespace."""
    text = provider.paste().strip()
    return text or None
