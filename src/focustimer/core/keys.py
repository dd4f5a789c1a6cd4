"""Decoded keyboard events as seen by the core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

CHAR = "char"
ENTER = "enter"
BACKSPACE = "backspace"
DELETE = "delete"
LEFT = "left"
RIGHT = "right"
HOME = "home"
END = "end"
ESC = "esc"
UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyEvent:
    """A single key press.

    ``key`` is one of the named keys above; for ``CHAR`` events ``char`` holds
    the typed character.
    """

    key: str
    char: Optional[str] = None
    ctrl: bool = False
    alt: bool = False

    @classmethod
    def of(cls, char: str) -> KeyEvent:
        """Build a plain character event."""
        return cls(CHAR, char)

    def is_char(self, char: str) -> bool:
        """Return True for an unmodified press of *char*."""
        return self.key == CHAR and self.char == char and not (self.ctrl or self.alt)
