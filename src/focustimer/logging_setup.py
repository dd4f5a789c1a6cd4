"""Logging configuration.

curses owns the screen while the app runs, so records go to a file or
nowhere.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(path: Optional[Path], level: str = "INFO") -> logging.Logger:
    """Attach a handler to the ``focustimer`` logger and return it.

    With no *path* a ``NullHandler`` is installed so nothing reaches stderr.
    Handlers from earlier calls are replaced.
    """
    root = logging.getLogger("focustimer")
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    if path is None:
        root.addHandler(logging.NullHandler())
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    root.setLevel(level)
    root.propagate = False
    return root
