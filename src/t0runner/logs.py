"""Logging sink configuration for the runner.

Every module logs through ``logging.getLogger(__name__)``; this module only
decides where records go and how they look.  Levels follow the numeric scale
read from ``T0_LOG_LEVEL``:

1 debug, 2 info, 3 warn, 4 error, 5 fatal, 6 none.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Dict, Optional, TextIO, Tuple

import typer

ROOT_LOGGER_NAME = "t0runner"
ENV_COLOR = "T0_COLOR"
ENV_LOG_LEVEL = "T0_LOG_LEVEL"
DEFAULT_LEVEL = 2

_TRUTHY = frozenset({"1", "t", "true", "y", "yes", "on"})
_LEVELS: Dict[int, int] = {
    1: logging.DEBUG,
    2: logging.INFO,
    3: logging.WARNING,
    4: logging.ERROR,
    5: logging.CRITICAL,
    6: logging.CRITICAL + 10,
}
_LABELS: Dict[int, str] = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO ",
    logging.WARNING: "WARN ",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "FATAL",
}
_COLORS: Dict[int, str] = {
    logging.DEBUG: typer.colors.MAGENTA,
    logging.INFO: typer.colors.CYAN,
    logging.WARNING: typer.colors.YELLOW,
    logging.ERROR: typer.colors.RED,
    logging.CRITICAL: typer.colors.BRIGHT_RED,
}


class RunnerFormatter(logging.Formatter):
    """Render ``LEVEL file.py:line: message`` with optional ANSI color."""

    def __init__(self, *, color: bool = False) -> None:
        super().__init__("%(levelname)s %(filename)s:%(lineno)d: %(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        if self.color:
            label = typer.style(label, fg=_COLORS.get(record.levelno), bold=True)
        original = record.levelname
        record.levelname = label
        try:
            return super().format(record)
        finally:
            record.levelname = original


def env_flag(name: str, default: bool = False) -> bool:
    """Interpret an environment variable as a boolean toggle."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_log_level(name: str = ENV_LOG_LEVEL) -> Tuple[int, Optional[str]]:
    """Return the numeric log level and a warning when the value was rejected."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return DEFAULT_LEVEL, None
    try:
        parsed = int(raw.strip())
    except ValueError:
        return DEFAULT_LEVEL, f"{name}={raw!r} is not an integer; using {DEFAULT_LEVEL}"
    if parsed not in _LEVELS:
        return DEFAULT_LEVEL, f"{name}={parsed} is outside 1-6; using {DEFAULT_LEVEL}"
    return parsed, None


def configure_logging(
    level: int = DEFAULT_LEVEL,
    *,
    color: bool = False,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Install the runner handler on the ``t0runner`` logger.

    Handlers are replaced rather than appended so repeated calls (tests, nested
    invocations) never duplicate output.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(_LEVELS.get(level, _LEVELS[DEFAULT_LEVEL]))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(RunnerFormatter(color=color))

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


def configure_from_env() -> logging.Logger:
    """Configure logging from ``T0_COLOR`` and ``T0_LOG_LEVEL``."""
    level, warning = env_log_level()
    logger = configure_logging(level, color=env_flag(ENV_COLOR))
    if warning:
        logger.warning(warning)
    return logger


def env_var_usage() -> str:
    """Describe the environment variables understood by the runner."""
    return "\n".join(
        [
            "environment variables:",
            f"{ENV_COLOR}\t toggle logger colored output (default: false)",
            f"{ENV_LOG_LEVEL}\t set log level, 1 - 6, 1 is debug. The higher the less logs (default: {DEFAULT_LEVEL})",
        ]
    )


__all__ = [
    "ENV_COLOR",
    "ENV_LOG_LEVEL",
    "RunnerFormatter",
    "configure_from_env",
    "configure_logging",
    "env_flag",
    "env_log_level",
    "env_var_usage",
]
