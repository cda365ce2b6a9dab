"""Typed task records and the validate/execute operations on them."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Sequence, Tuple

import typer
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import ExecError, UsageError
from .tools import needs as needs_module
from .tools import packages as packages_module
from .tools import process as process_module
from .tools.process import Launcher
from .utils.placeholders import build_env, substitute_argv
from .utils.suggest import did_you_mean

HELP_FLAGS = frozenset({"-h", "--help"})
STDERR_BEGINS = "command stderr BEGINS"
STDERR_ENDS = "command stderr ENDS"

LOGGER = logging.getLogger(__name__)

PackageFinder = Callable[[], Sequence[str]]


class RecordModel(BaseModel):
    """Base Pydantic model for immutable config records."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Task(RecordModel):
    """One named unit of work declared in the runner config."""

    name: str
    package: bool = False
    needs: str = ""
    env: List[str] = Field(default_factory=list)
    exec: List[str] = Field(min_length=1)
    inputs: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not value or any(char.isspace() for char in value):
            raise ValueError("task name must be a non-empty word")
        return value

    @field_validator("exec")
    @classmethod
    def _check_exec(cls, value: List[str]) -> List[str]:
        for index, line in enumerate(value):
            if not line.split():
                raise ValueError(f"exec line {index} is blank")
        return value

    @field_validator("env")
    @classmethod
    def _check_env(cls, value: List[str]) -> List[str]:
        for pair in value:
            key, sep, _ = pair.partition("=")
            if not sep or not key.strip():
                raise ValueError(f"env entry must look like KEY=VALUE: {pair!r}")
        return value

    # ------------------------------------------------------------------ inputs
    def split_inputs(self, inputs: Sequence[str]) -> Tuple[str, List[str]]:
        """Return ``(package, arguments)`` for the task arguments.

        Package-scoped tasks consume the first input as the package (one
        trailing ``/`` removed); other tasks pass every input through and only
        expose the first one to ``<package>``.
        """

        values = list(inputs)
        if self.package:
            if not values:
                return "", []
            package = values[0]
            if package in HELP_FLAGS:
                # help goes to the task's own argv, not into <package>
                return "", values
            if package.endswith("/"):
                package = package[:-1]
            return package, values[1:]
        return (values[0] if values else ""), values

    # ---------------------------------------------------------------- validate
    def validate_inputs(
        self,
        inputs: Sequence[str],
        *,
        find_packages: Optional[PackageFinder] = None,
    ) -> None:
        """Check package, argument count and needs before anything runs."""

        if any(value in HELP_FLAGS for value in inputs):
            return

        package, arguments = self.split_inputs(inputs)
        if self.package:
            if not inputs:
                raise UsageError(f"{self.name}: package is required")
            finder = find_packages or packages_module.discover_packages
            known = list(finder())
            if package not in known:
                hint, found = did_you_mean(package, known)
                if found:
                    raise UsageError(f"{package}: unknown package, {hint}")
                raise UsageError(f"{package}: unknown package")

        if self.inputs and len(arguments) != self.inputs:
            raise UsageError(f"{self.name}: expected {self.inputs} arguments got: {arguments}")

        needs_module.run_needs(self.needs)

    # ----------------------------------------------------------------- execute
    def execute(self, inputs: Sequence[str], *, launcher: Optional[Launcher] = None) -> None:
        """Run every exec line in order, stopping at the first failure."""

        launch = launcher or process_module.run_command
        package, arguments = self.split_inputs(inputs)

        for line in self.exec:
            argv = substitute_argv([*line.split(), *arguments], package)
            LOGGER.debug(line)
            LOGGER.debug("argv: %s", argv)
            if not argv or not argv[0]:
                raise ExecError(f"command '{line}': empty program name")

            env = build_env(self.env, package) if self.env else None
            if env is not None:
                LOGGER.debug("env: %s", " ".join(f"{key}={value}" for key, value in env.items()))

            try:
                result = launch(argv, env)
            except ExecError as error:
                raise ExecError(f"command '{line}'") from error

            if result.stdout:
                typer.echo(result.stdout, nl=not result.stdout.endswith("\n"))

            if result.stderr:
                LOGGER.info(STDERR_BEGINS)
                typer.echo(result.stderr, err=True, nl=not result.stderr.endswith("\n"))
                LOGGER.info(STDERR_ENDS)

            if result.failed:
                raise ExecError(
                    f"command '{line}': exit status {result.returncode}",
                    returncode=result.returncode,
                )


__all__ = ["HELP_FLAGS", "RecordModel", "STDERR_BEGINS", "STDERR_ENDS", "Task"]
