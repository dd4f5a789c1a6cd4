"""Input router: turns key events into timer commands."""

from __future__ import annotations

from typing import Protocol

from focustimer.core.keys import ENTER, KeyEvent
from focustimer.core.timer import Command, NoCommand, Quit, Reset, SubmitDuration

QUIT_KEY = "q"
RESET_KEY = "r"


class LineEditor(Protocol):
    """The editing widget as far as the router is concerned."""

    def feed(self, event: KeyEvent) -> bool:
        """Handle *event* as an edit; return True if it was consumed."""

    def text(self) -> str:
        """Return the full contents of the buffer."""

    def clear(self) -> None:
        """Empty the buffer."""


def route(event: KeyEvent, editor: LineEditor) -> Command:
    """Offer *event* to *editor*, then map it to an application command.

    The editor has priority: any key it consumes shadows the bindings below.
    Submitted text is not validated here.
    """
    if editor.feed(event):
        return NoCommand()
    if event.is_char(QUIT_KEY):
        return Quit()
    if event.key == ENTER:
        return SubmitDuration(editor.text())
    if event.is_char(RESET_KEY):
        return Reset()
    return NoCommand()
