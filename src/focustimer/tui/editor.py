"""Single-line text editor for the duration field."""

from __future__ import annotations

from typing import List

from focustimer.core.keys import BACKSPACE, CHAR, DELETE, END, HOME, LEFT, RIGHT, KeyEvent
from focustimer.core.view import InputView

# Characters that can appear in something the user might mean as a duration.
# Everything else falls through to the application key bindings.
DURATION_CHARS = frozenset("0123456789.-+ ")


class DurationEditor:
    """A line buffer with a cursor.

    Consumes insertion of duration characters and the usual editing keys.
    Enter is never consumed, so it always reaches the router as a submit.
    """

    def __init__(self, accept: frozenset = DURATION_CHARS) -> None:
        self._accept = accept
        self._chars: List[str] = []
        self._cursor = 0

    def feed(self, event: KeyEvent) -> bool:
        """Apply *event* as an edit.  Return True if it was consumed."""
        if event.key == CHAR and event.char is not None:
            if event.ctrl:
                return self._control(event.char)
            if event.alt or event.char not in self._accept:
                return False
            self._chars.insert(self._cursor, event.char)
            self._cursor += 1
            return True
        if event.key == BACKSPACE:
            if self._cursor > 0:
                self._cursor -= 1
                del self._chars[self._cursor]
            return True
        if event.key == DELETE:
            if self._cursor < len(self._chars):
                del self._chars[self._cursor]
            return True
        if event.key == LEFT:
            self._cursor = max(self._cursor - 1, 0)
            return True
        if event.key == RIGHT:
            self._cursor = min(self._cursor + 1, len(self._chars))
            return True
        if event.key == HOME:
            self._cursor = 0
            return True
        if event.key == END:
            self._cursor = len(self._chars)
            return True
        return False

    def text(self) -> str:
        """Return the buffer contents."""
        return "".join(self._chars)

    def clear(self) -> None:
        """Empty the buffer and move the cursor to the start."""
        self._chars.clear()
        self._cursor = 0

    def view(self) -> InputView:
        """Return the text and cursor column for drawing."""
        return InputView(self.text(), self._cursor)

    def _control(self, char: str) -> bool:
        """Emacs-style line bindings: ^A home, ^E end, ^U kill to start."""
        if char == "a":
            self._cursor = 0
        elif char == "e":
            self._cursor = len(self._chars)
        elif char == "u":
            del self._chars[: self._cursor]
            self._cursor = 0
        else:
            return False
        return True
