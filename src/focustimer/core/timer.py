"""Timer core: a pure state-machine countdown timer.

States are immutable values and every transition returns a new one.  Time is
never decremented: remaining time is recomputed from the instant captured at
start, so the display stays exact regardless of loop jitter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

logger = logging.getLogger(__name__)


# -- states ------------------------------------------------------------------


@dataclass(frozen=True)
class Idle:
    """No active countdown."""


@dataclass(frozen=True)
class Running:
    """A countdown in progress.

    ``started_at`` is a ``time.monotonic()`` instant and ``duration`` is in
    seconds.  Both are fixed when the countdown starts.
    """

    started_at: float
    duration: float


@dataclass(frozen=True)
class Finished:
    """The countdown has elapsed."""


TimerState = Union[Idle, Running, Finished]


# -- commands ----------------------------------------------------------------


@dataclass(frozen=True)
class Quit:
    """Stop the application loop."""


@dataclass(frozen=True)
class SubmitDuration:
    """Start a countdown from the raw text of the input buffer."""

    text: str


@dataclass(frozen=True)
class Reset:
    """Return the timer to idle."""


@dataclass(frozen=True)
class NoCommand:
    """The event produced nothing for the timer to act on."""


Command = Union[Quit, SubmitDuration, Reset, NoCommand]


@dataclass(frozen=True)
class Step:
    """Outcome of applying a command.

    ``clear_input`` asks the owner of the input buffer to empty it and
    ``quit`` asks the loop to stop once the current iteration completes.
    """

    state: TimerState
    clear_input: bool = False
    quit: bool = False


# -- public interface ----------------------------------------------------------


def parse_duration(text: str) -> Optional[int]:
    """Return *text* as a whole number of seconds, or ``None`` if invalid.

    Only unsigned decimal digits are accepted.  Surrounding whitespace is
    ignored; signs, fractions and anything else are rejected.
    """
    stripped = text.strip()
    if not stripped or not (stripped.isascii() and stripped.isdigit()):
        return None
    return int(stripped)


def apply(state: TimerState, command: Command, now: float) -> Step:
    """Apply *command* to *state* at instant *now*."""
    if isinstance(command, Quit):
        return Step(state, quit=True)

    if isinstance(command, SubmitDuration):
        seconds = parse_duration(command.text)
        if seconds is None:
            logger.debug("Ignoring invalid duration %r", command.text)
            return Step(state)
        logger.info("Countdown started: %d seconds", seconds)
        return Step(Running(started_at=now, duration=float(seconds)), clear_input=True)

    if isinstance(command, Reset):
        if not isinstance(state, Idle):
            logger.info("Timer reset")
        return Step(Idle())

    return Step(state)


def tick(state: TimerState, now: float) -> TimerState:
    """Re-evaluate time-based transitions for *state* at instant *now*.

    A running countdown finishes once the elapsed time reaches its duration
    (inclusive).  Other states are returned unchanged.
    """
    if isinstance(state, Running) and now - state.started_at >= state.duration:
        logger.info("Countdown finished")
        return Finished()
    return state


def remaining(state: TimerState, now: float) -> float:
    """Return the remaining seconds of *state* at *now*, never negative.

    Returns 0.0 when the timer is idle or finished.
    """
    if isinstance(state, Running):
        return max(state.duration - (now - state.started_at), 0.0)
    return 0.0
