"""Front-end independent key events consumed by the session controller."""

from dataclasses import dataclass
from enum import StrEnum


class Key(StrEnum):
    ENTER = "enter"
    ESC = "esc"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGEUP = "pageup"
    PAGEDOWN = "pagedown"
    PASTE = "paste"


@dataclass(frozen=True)
class KeyEvent:
    """One key press.

    ``key`` is either a single printable character or a ``Key`` name.
    ``text`` carries the pasted string for ``Key.PASTE``.
    """

    key: str
    ctrl: bool = False
    shift: bool = False
    alt: bool = False
    text: str | None = None

    @property
    def is_char(self) -> bool:
        """True for a single printable character without ctrl or alt."""
        return len(self.key) == 1 and self.key.isprintable() and not (self.ctrl or self.alt)

    def is_ctrl(self, char: str) -> bool:
        return self.ctrl and self.key.lower() == char


def ctrl(c: str) -> KeyEvent:
    return KeyEvent(c, ctrl=True)
