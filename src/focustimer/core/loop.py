"""Loop driver: owns the timer and editor and runs poll/update/render.

One iteration applies at most one command, then exactly one expiry tick, then
one render.  Quitting takes effect after the iteration that received it.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol, Tuple

from focustimer.core.keys import KeyEvent
from focustimer.core.router import LineEditor, route
from focustimer.core.timer import Idle, NoCommand, TimerState, apply, tick
from focustimer.core.view import InputView, RenderModel, project

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1


class Editor(LineEditor, Protocol):
    def view(self) -> InputView:
        """Return the editor's visual representation."""


class Terminal(Protocol):
    """The rendering backend consumed by the loop."""

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        """Wait up to *timeout* seconds for a key; ``None`` on timeout."""

    def size(self) -> Tuple[int, int]:
        """Return ``(rows, cols)`` of the drawable area."""

    def draw(self, model: RenderModel, size: Tuple[int, int]) -> None:
        """Render *model* into an area of *size*."""


class FocusApp:
    """All mutable state of one session, advanced one event at a time."""

    def __init__(self, editor: Editor, clock: Callable[[], float] = time.monotonic) -> None:
        self.editor = editor
        self.state: TimerState = Idle()
        self._clock = clock
        self.now = clock()

    def step(self, event: Optional[KeyEvent]) -> bool:
        """Process one poll result.  Return False once the app should quit."""
        command = route(event, self.editor) if event is not None else NoCommand()
        now = self.now = self._clock()
        result = apply(self.state, command, now)
        if result.clear_input:
            self.editor.clear()
        self.state = tick(result.state, now)
        return not result.quit

    def render(self) -> RenderModel:
        """Project the state as of the last step."""
        return project(self.state, self.now, self.editor.view())


def run(
    terminal: Terminal,
    app: FocusApp,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
) -> None:
    """Drive *app* against *terminal* until the user quits.

    Terminal errors propagate to the caller; the terminal's own context
    manager is responsible for restoring the screen.
    """
    logger.debug("Entering main loop (poll interval %.3fs)", poll_interval)
    terminal.draw(app.render(), terminal.size())
    running = True
    while running:
        size = terminal.size()
        event = terminal.poll(poll_interval)
        running = app.step(event)
        terminal.draw(app.render(), size)
    logger.debug("Main loop finished")
