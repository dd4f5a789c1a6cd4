"""Curses rendering backend.

``CursesTerminal`` is a context manager: entering puts the terminal into
cbreak/keypad mode, leaving restores it even if the loop raised.  Failures
are reported as :class:`~focustimer.errors.TerminalError`.
"""

from __future__ import annotations

import curses
import locale
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from focustimer.core import keys
from focustimer.core.keys import KeyEvent
from focustimer.core.view import Emphasis, RenderModel
from focustimer.errors import TerminalError

logger = logging.getLogger(__name__)

HEADER_ROWS = 3
MIN_BOX_ROWS = 3

_SUCCESS_PAIR = 1
_ALERT_PAIR = 2

_NAMED_KEYS = {
    curses.KEY_ENTER: keys.ENTER,
    curses.KEY_BACKSPACE: keys.BACKSPACE,
    curses.KEY_DC: keys.DELETE,
    curses.KEY_LEFT: keys.LEFT,
    curses.KEY_RIGHT: keys.RIGHT,
    curses.KEY_HOME: keys.HOME,
    curses.KEY_END: keys.END,
}


def decode_key(ch: Union[str, int], following: Optional[Union[str, int]] = None) -> KeyEvent:
    """Translate a ``get_wch()`` result into a :class:`KeyEvent`.

    Terminals send Alt+key as ESC followed by the key; *following* is the
    key read straight after an ESC, if any arrived.
    """
    if ch == "\x1b" and isinstance(following, str) and following.isprintable():
        return KeyEvent(keys.CHAR, following, alt=True)
    if isinstance(ch, int):
        return KeyEvent(_NAMED_KEYS.get(ch, keys.UNKNOWN))
    if ch in ("\n", "\r"):
        return KeyEvent(keys.ENTER)
    if ch in ("\b", "\x7f"):
        return KeyEvent(keys.BACKSPACE)
    if ch == "\x1b":
        return KeyEvent(keys.ESC)
    code = ord(ch)
    if 1 <= code <= 26:
        return KeyEvent(keys.CHAR, chr(code + 96), ctrl=True)
    if code < 32:
        return KeyEvent(keys.UNKNOWN)
    return KeyEvent.of(ch)


@dataclass(frozen=True)
class Cell:
    """A run of text at a screen position."""

    y: int
    x: int
    text: str
    emphasis: Emphasis = Emphasis.NONE


def layout(model: RenderModel, size: Tuple[int, int]) -> Tuple[List[Cell], Optional[Tuple[int, int]]]:
    """Place *model* on a screen of *size*.

    The prompt and timer share a header at the top; the input region is a
    bordered box filling the rest of the screen.  Returns the cells to draw
    and the cursor position, if any.  Text is clipped to the screen.
    """
    rows, cols = size
    cells: List[Cell] = []
    cursor: Optional[Tuple[int, int]] = None
    header_row = 0

    for region in model:
        if region.label != "input":
            if header_row < min(HEADER_ROWS, rows):
                cells.append(Cell(header_row, 0, region.text[:cols], region.emphasis))
            header_row += 1
            continue

        top = HEADER_ROWS
        height = max(rows - top, MIN_BOX_ROWS)
        if top + height > rows or cols < 2:
            continue
        inner = cols - 2
        title = (region.title or "")[:inner]
        cells.append(Cell(top, 0, "┌" + title + "─" * (inner - len(title)) + "┐"))
        for y in range(top + 1, top + height - 1):
            cells.append(Cell(y, 0, "│" + " " * inner + "│"))
        cells.append(Cell(top + height - 1, 0, "└" + "─" * inner + "┘"))

        text = region.text
        offset = 0
        if region.cursor is not None and region.cursor >= inner:
            offset = region.cursor - inner + 1
        cells.append(Cell(top + 1, 1, text[offset:offset + inner], region.emphasis))
        if region.cursor is not None:
            cursor = (top + 1, 1 + region.cursor - offset)

    return cells, cursor


class CursesTerminal:
    """The terminal, driven through curses."""

    def __init__(self) -> None:
        self._screen = None
        self._attrs = {Emphasis.NONE: 0, Emphasis.SUCCESS: curses.A_BOLD, Emphasis.ALERT: curses.A_BOLD}

    def __enter__(self) -> CursesTerminal:
        try:
            locale.setlocale(locale.LC_ALL, "")
            self._screen = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self._screen.keypad(True)
            self._init_colors()
        except (curses.error, locale.Error) as exc:
            self._restore()
            raise TerminalError(f"terminal setup failed: {exc}") from exc
        logger.debug("Terminal initialised")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self._restore()
        except TerminalError:
            if exc is None:
                raise
            logger.exception("Terminal teardown failed while handling %r", exc)

    # -- backend interface ---------------------------------------------------

    def poll(self, timeout: float) -> Optional[KeyEvent]:
        """Wait up to *timeout* seconds for a key; ``None`` if none arrived."""
        screen = self._require_screen()
        screen.timeout(max(int(timeout * 1000), 0))
        try:
            ch = screen.get_wch()
        except curses.error:
            # get_wch() signals "no input before the timeout" this way.
            return None
        except OSError as exc:
            raise TerminalError(f"event read failed: {exc}") from exc
        following = self._read_following(screen) if ch == "\x1b" else None
        event = decode_key(ch, following)
        logger.debug("Key %r decoded as %s", ch, event)
        return event

    def size(self) -> Tuple[int, int]:
        return self._require_screen().getmaxyx()

    def draw(self, model: RenderModel, size: Tuple[int, int]) -> None:
        """Replace the screen contents with *model*."""
        screen = self._require_screen()
        # The window may have shrunk since *size* was read; never draw past it.
        max_rows, max_cols = screen.getmaxyx()
        rows, cols = min(size[0], max_rows), min(size[1], max_cols)
        cells, cursor = layout(model, (rows, cols))
        screen.erase()
        for cell in cells:
            attr = self._attrs[cell.emphasis]
            text, last = cell.text, ""
            if cell.y == rows - 1 and cell.x + len(text) >= cols:
                # addstr into the bottom-right cell would scroll; insstr does not.
                text, last = text[:-1], text[-1:]
            try:
                screen.addstr(cell.y, cell.x, text, attr)
                if last:
                    screen.insstr(cell.y, cell.x + len(text), last, attr)
            except curses.error as exc:
                raise TerminalError(f"draw failed: {exc}") from exc
        try:
            if cursor is not None:
                curses.curs_set(1)
                screen.move(*cursor)
            else:
                curses.curs_set(0)
        except curses.error:
            logger.debug("Terminal does not support cursor visibility changes")
        try:
            screen.refresh()
        except curses.error as exc:
            raise TerminalError(f"draw failed: {exc}") from exc

    # -- private helpers -----------------------------------------------------

    def _read_following(self, screen) -> Optional[str]:
        """Return a printable key already queued behind an ESC, without waiting.

        Any other key is pushed back so the next poll sees it on its own.
        """
        screen.timeout(0)
        try:
            nxt = screen.get_wch()
        except curses.error:
            return None
        except OSError as exc:
            raise TerminalError(f"event read failed: {exc}") from exc
        if isinstance(nxt, str) and nxt.isprintable():
            return nxt
        if isinstance(nxt, str):
            curses.unget_wch(nxt)
        else:
            curses.ungetch(nxt)
        return None

    def _require_screen(self):
        if self._screen is None:
            raise TerminalError("terminal is not initialised")
        return self._screen

    def _init_colors(self) -> None:
        if not curses.has_colors():
            return
        curses.start_color()
        try:
            curses.use_default_colors()
            background = -1
        except curses.error:
            background = curses.COLOR_BLACK
        curses.init_pair(_SUCCESS_PAIR, curses.COLOR_GREEN, background)
        curses.init_pair(_ALERT_PAIR, curses.COLOR_RED, background)
        self._attrs[Emphasis.SUCCESS] = curses.color_pair(_SUCCESS_PAIR) | curses.A_BOLD
        self._attrs[Emphasis.ALERT] = curses.color_pair(_ALERT_PAIR) | curses.A_BOLD

    def _restore(self) -> None:
        if self._screen is None:
            return
        screen, self._screen = self._screen, None
        try:
            screen.keypad(False)
            curses.nocbreak()
            curses.echo()
            curses.endwin()
        except curses.error as exc:
            raise TerminalError(f"terminal teardown failed: {exc}") from exc
        logger.debug("Terminal restored")
