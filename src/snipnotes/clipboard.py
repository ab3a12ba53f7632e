"""System clipboard through the platform's command-line tools."""

import subprocess

from loguru import logger

_COPY_COMMANDS = (
    ["wl-copy"],
    ["xclip", "-selection", "clipboard"],
    ["pbcopy"],
)

_PASTE_COMMANDS = (
    ["wl-paste", "--no-newline"],
    ["xclip", "-selection", "clipboard", "-o"],
    ["pbpaste"],
)

_TIMEOUT = 2


class SystemClipboard:
    """Copy and paste by shelling out to the first clipboard tool that works."""

    def copy(self, text: str) -> bool:
        for cmd in _COPY_COMMANDS:
            try:
                result = subprocess.run(cmd, input=text, text=True, timeout=_TIMEOUT)
            except (FileNotFoundError, subprocess.TimeoutExpired):
                continue
            if result.returncode == 0:
                return True
        logger.debug("No clipboard tool accepted the copy")
        return False

    def paste(self) -> str | None:
        for cmd in _PASTE_COMMANDS:
            try:
                result = subprocess.run(cmd, capture_output=True, text=True, timeout=_TIMEOUT)
            except (FileNotFoundError, subprocess.TimeoutExpired):
                continue
            if result.returncode == 0:
                return result.stdout
        logger.debug("No clipboard tool returned text")
        return None
