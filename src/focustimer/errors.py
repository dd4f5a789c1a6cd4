"""Exception types shared across focus-timer."""


class FocusTimerError(Exception):
    """Base class for focus-timer errors."""


class TerminalError(FocusTimerError):
    """Raised when the terminal cannot be set up, read from, drawn to, or restored."""
