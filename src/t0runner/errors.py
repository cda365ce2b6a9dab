"""Error hierarchy shared by the task runner."""

from __future__ import annotations

import traceback
from pathlib import Path
from typing import List, Optional


class RunnerError(RuntimeError):
    """Base error raised for task runner failures."""


class UsageError(RunnerError):
    """Raised for problems the user can solve by reading the usage text."""


class ConfigError(RunnerError):
    """Raised when the config file exists but cannot be used."""


class PreconditionError(RunnerError):
    """Raised when a task need (clean tree, network) is not met."""


class DiscoveryError(RunnerError):
    """Raised when the workspace walk for packages fails."""


class ExecError(RunnerError):
    """Raised when a child process fails to start or exits non-zero."""

    def __init__(self, message: str, *, returncode: Optional[int] = None) -> None:
        super().__init__(message)
        self.returncode = returncode


def _raise_site(error: BaseException) -> Optional[str]:
    tb = error.__traceback__
    if tb is None:
        return None
    frame = traceback.extract_tb(tb)[-1]
    return f"{Path(frame.filename).name}:{frame.lineno}"


def describe_error(error: BaseException) -> str:
    """Render ``error`` and its causes as ``file:line: message: cause``."""

    messages: List[str] = []
    seen: set[int] = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current).strip() or type(current).__name__
        messages.append(text)
        current = current.__cause__

    chain = ": ".join(messages)
    site = _raise_site(error)
    return f"{site}: {chain}" if site else chain


def exit_code_for(error: BaseException) -> int:
    """Return the process exit code the runner should terminate with."""

    if isinstance(error, ExecError) and error.returncode is not None and error.returncode > 0:
        return error.returncode
    return 1


__all__ = [
    "ConfigError",
    "DiscoveryError",
    "ExecError",
    "PreconditionError",
    "RunnerError",
    "UsageError",
    "describe_error",
    "exit_code_for",
]
