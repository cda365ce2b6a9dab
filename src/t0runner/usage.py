"""Help text printed whenever a usage-class error ends the run."""

from __future__ import annotations

from typing import List, Optional, Sequence

import typer

from .config import DEFAULT_CONFIG_FILES, RunnerConfig
from .errors import DiscoveryError, describe_error
from .logs import env_var_usage
from .tools import packages as packages_module
from .tools.packages import DEFAULT_SOURCE_GLOB

HEADER = """runner: miscellaneous automation tool
run task:      ./run <task> <args...>
task help:     ./run <task> -h
version:       ./run -v
custom config: ./run -config <file>"""


def _task_lines(names: Sequence[str]) -> str:
    return "\n".join(f"./run {name}" for name in names)


def render_usage(
    config: Optional[RunnerConfig],
    packages: Sequence[str],
    *,
    config_files: Sequence[str] = DEFAULT_CONFIG_FILES,
) -> str:
    """Build the usage text; sections with nothing to list are left out."""

    blocks: List[str] = [HEADER]

    if config is not None:
        package_tasks = [task.name for task in config.package_tasks()]
        repository_tasks = [task.name for task in config.repository_tasks()]
        if package_tasks:
            blocks.append("package tasks:\n" + _task_lines(package_tasks))
        if repository_tasks:
            blocks.append("repository tasks:\n" + _task_lines(repository_tasks))

    if packages:
        blocks.append("packages:\n" + "\n".join(f"- {package}" for package in packages))

    blocks.append(env_var_usage())
    blocks.append(
        "\n".join(
            [
                ".env file is checked for environment variables.",
                "see docs for config documentation.",
                f"default config files: {', '.join(config_files)}",
            ]
        )
    )
    return "\n\n".join(blocks) + "\n"


def print_usage(config: Optional[RunnerConfig]) -> None:
    """Discover packages and print the usage text to stdout."""

    source_glob = config.sources if config is not None else DEFAULT_SOURCE_GLOB
    try:
        packages = packages_module.discover_packages(source_glob=source_glob)
    except DiscoveryError as error:
        typer.echo(f"finding packages: error: {describe_error(error)}")
        packages = []

    typer.echo(render_usage(config, packages), nl=False)


__all__ = ["HEADER", "print_usage", "render_usage"]
