"""focus-timer: a single-screen terminal countdown timer."""

__version__ = "0.1.0"
