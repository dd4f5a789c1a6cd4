"""Curses backend and line editor used by the interactive loop."""
