"""Collaborators the task model relies on: packages, needs and processes."""

from .needs import NEED_CHECKS, check_git_clean, check_online, parse_needs, run_needs
from .packages import DEFAULT_SOURCE_GLOB, discover_packages
from .process import CommandResult, Launcher, resolve_program, run_command

__all__ = [
    "CommandResult",
    "DEFAULT_SOURCE_GLOB",
    "Launcher",
    "NEED_CHECKS",
    "check_git_clean",
    "check_online",
    "discover_packages",
    "parse_needs",
    "resolve_program",
    "run_command",
    "run_needs",
]
