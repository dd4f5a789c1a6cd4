"""Read-only user settings for focus-timer.

Settings come from an optional JSON file in the platform config directory,
overridden by ``FOCUS_TIMER_*`` environment variables.  Anything missing or
malformed falls back to the defaults.
"""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

APP_NAME = "focus-timer"

DEFAULT_POLL_INTERVAL_MS = 100
MIN_POLL_INTERVAL_MS = 10
MAX_POLL_INTERVAL_MS = 1000
DEFAULT_LOG_LEVEL = "INFO"

ENV_POLL_MS = "FOCUS_TIMER_POLL_MS"
ENV_LOG_FILE = "FOCUS_TIMER_LOG"
ENV_LOG_LEVEL = "FOCUS_TIMER_LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    """Effective settings after merging the config file and environment."""

    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    log_file: Optional[Path] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def poll_interval(self) -> float:
        """Poll interval in seconds."""
        return self.poll_interval_ms / 1000.0


def get_config_path() -> Path:
    """Return the platform-specific location of ``config.json``."""
    system = platform.system().lower()
    if system == "darwin":
        base = Path.home() / "Library" / "Application Support"
    elif system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            base = Path(appdata)
        else:
            base = Path.home() / "AppData" / "Roaming"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base / APP_NAME / "config.json"


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Read the JSON config at *path*, or ``{}`` if it is missing or malformed."""
    path = path if path is not None else get_config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", path, exc)
        return {}
    if isinstance(data, dict):
        return data
    logger.warning("Ignoring config %s: top level is not an object", path)
    return {}


def load_settings(
    config: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    """Merge *config* and *environ* into :class:`Settings`.

    Defaults to the config file on disk and ``os.environ``.
    """
    config = config if config is not None else load_config()
    environ = environ if environ is not None else os.environ

    poll_ms = _poll_interval(environ.get(ENV_POLL_MS, config.get("poll_interval_ms")))

    log_file = environ.get(ENV_LOG_FILE) or config.get("log_file")
    if not isinstance(log_file, str) or not log_file:
        log_file = None

    log_level = environ.get(ENV_LOG_LEVEL) or config.get("log_level")
    if not isinstance(log_level, str) or not isinstance(logging.getLevelName(log_level.upper()), int):
        log_level = DEFAULT_LOG_LEVEL

    return Settings(
        poll_interval_ms=poll_ms,
        log_file=Path(log_file).expanduser() if log_file else None,
        log_level=log_level.upper(),
    )


def _poll_interval(raw: Any) -> int:
    if isinstance(raw, bool):
        return DEFAULT_POLL_INTERVAL_MS
    if isinstance(raw, str):
        try:
            raw = int(raw.strip())
        except ValueError:
            return DEFAULT_POLL_INTERVAL_MS
    if not isinstance(raw, int):
        return DEFAULT_POLL_INTERVAL_MS
    if not (MIN_POLL_INTERVAL_MS <= raw <= MAX_POLL_INTERVAL_MS):
        return DEFAULT_POLL_INTERVAL_MS
    return raw
