"""View projector: derives what to draw from the current state.

Everything here is pure: projecting the same state at the same instant always
yields the same model, and nothing is mutated.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Tuple

from focustimer.core.timer import Finished, Running, TimerState, remaining

PROMPT = "How long would you like to focus?"
READY = "Ready to start…"
TIMES_UP = "Time's up! Press 'r' to reset"
INPUT_TITLE = "Enter Duration"


class Emphasis(enum.Enum):
    """How a region should stand out when drawn."""

    NONE = "none"
    SUCCESS = "success"
    ALERT = "alert"


@dataclass(frozen=True)
class InputView:
    """The editor's own visual representation: its text and cursor column."""

    text: str
    cursor: int


@dataclass(frozen=True)
class Region:
    """One labelled piece of text in the render model.

    ``title`` and ``cursor`` are only set for the input region.
    """

    label: str
    text: str
    emphasis: Emphasis = Emphasis.NONE
    title: Optional[str] = None
    cursor: Optional[int] = None


RenderModel = Tuple[Region, ...]


def format_remaining(seconds: float) -> str:
    """Format *seconds* as ``MM:SS``, flooring to whole seconds."""
    total = max(int(seconds), 0)
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def timer_region(state: TimerState, now: float) -> Region:
    """Describe *state* at *now* as the timer line."""
    if isinstance(state, Running):
        return Region(
            "timer",
            f"Time remaining: {format_remaining(remaining(state, now))}",
            Emphasis.SUCCESS,
        )
    if isinstance(state, Finished):
        return Region("timer", TIMES_UP, Emphasis.ALERT)
    return Region("timer", READY)


def project(state: TimerState, now: float, input_view: InputView) -> RenderModel:
    """Build the render model for *state* at *now*.

    Regions come in drawing order: prompt, timer, input.
    """
    return (
        Region("prompt", PROMPT),
        timer_region(state, now),
        Region("input", input_view.text, title=INPUT_TITLE, cursor=input_view.cursor),
    )
