"""Child process launching for exec lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional, Sequence

import shutil
import subprocess

from ..errors import ExecError


@dataclass(slots=True)
class CommandResult:
    """Outcome of a finished child process."""

    argv: List[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def failed(self) -> bool:
        return self.returncode != 0


Launcher = Callable[[Sequence[str], Optional[Mapping[str, str]]], CommandResult]


def resolve_program(program: str) -> str:
    """Resolve ``program`` against the runner's own ``PATH``."""
    if not program:
        raise ExecError("empty program name")
    resolved = shutil.which(program)
    if resolved is None:
        raise ExecError(f"executable not available: {program}")
    return resolved


def run_command(argv: Sequence[str], env: Optional[Mapping[str, str]] = None) -> CommandResult:
    """Run ``argv`` to completion, collecting stdout and stderr separately.

    ``env`` replaces the child environment entirely when given; ``None`` lets
    the child inherit the runner's environment.
    """

    if not argv:
        raise ExecError("empty command line")

    program = resolve_program(argv[0])
    child_env: Optional[Dict[str, str]] = dict(env) if env is not None else None
    try:
        process = subprocess.run(  # noqa: S603  # command is sourced from the runner config
            [program, *argv[1:]],
            env=child_env,
            check=False,
            capture_output=True,
        )
    except OSError as error:
        raise ExecError(f"starting {argv[0]}") from error

    stdout = process.stdout.decode("utf-8", errors="replace") if process.stdout else ""
    stderr = process.stderr.decode("utf-8", errors="replace") if process.stderr else ""
    return CommandResult(argv=list(argv), returncode=process.returncode, stdout=stdout, stderr=stderr)


__all__ = ["CommandResult", "Launcher", "resolve_program", "run_command"]
