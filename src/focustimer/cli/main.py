"""CLI entry point for focus-timer.

Uses Click to expose the ``focus-timer`` command, which runs the interactive
countdown until the user quits.
"""

from __future__ import annotations

import logging
import sys

import click

import focustimer
from focustimer.config import load_settings
from focustimer.core.loop import FocusApp, run
from focustimer.errors import TerminalError
from focustimer.logging_setup import configure_logging
from focustimer.tui.editor import DurationEditor
from focustimer.tui.terminal import CursesTerminal

logger = logging.getLogger(__name__)


@click.command()
@click.version_option(version=focustimer.__version__, prog_name="focus-timer")
def cli() -> None:
    """Type a duration in seconds, press Enter, and focus.

    Keys: q quit, r reset, Enter start.
    """
    settings = load_settings()
    try:
        configure_logging(settings.log_file, settings.log_level)
    except OSError as exc:
        click.echo(f"Logging disabled: {exc}", err=True)
        configure_logging(None)
    logger.info("Starting focus-timer %s (poll interval %dms)", focustimer.__version__, settings.poll_interval_ms)

    app = FocusApp(DurationEditor())
    try:
        with CursesTerminal() as terminal:
            run(terminal, app, settings.poll_interval)
    except TerminalError as exc:
        logger.error("app loop failed: %s", exc)
        click.echo(f"app loop failed: {exc}", err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Interrupted")
    logger.info("Exiting")
