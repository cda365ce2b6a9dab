"""CLI entry point: ``run [-v|-version] [-config <path>] <task> [<package>] [<args>...]``."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from dotenv import load_dotenv

from . import __version__
from .config import RunnerConfig, load_config
from .errors import RunnerError, UsageError, describe_error, exit_code_for
from .logs import configure_from_env
from .tools import packages as packages_module
from .usage import print_usage
from .utils.suggest import did_you_mean

APP_HELP = "runner: miscellaneous automation tool"
DOTENV_FILE = ".env"

# runner flags end at the task name; everything after it belongs to the task
CONTEXT_SETTINGS = {
    "allow_extra_args": True,
    "ignore_unknown_options": True,
    "allow_interspersed_args": False,
}

# __name__ is "__main__" under ``python -m``
LOGGER = logging.getLogger("t0runner.cli")

app = typer.Typer(help=APP_HELP, add_completion=False)


def load_dotenv_file(path: Optional[Path] = None) -> bool:
    """Load ``.env`` without overriding variables that are already set."""
    env_path = path or (Path.cwd() / DOTENV_FILE)
    if not env_path.is_file():
        return False
    return bool(load_dotenv(dotenv_path=env_path, override=False))


def dispatch(config: RunnerConfig, arguments: List[str]) -> None:
    """Resolve ``arguments[0]`` to a task, then validate and execute it."""

    if not arguments:
        raise UsageError("task is required")

    name, inputs = arguments[0], arguments[1:]
    task = config.find_task(name)
    if task is None:
        hint, found = did_you_mean(name, config.task_names())
        if found:
            raise UsageError(f"{name}: unknown task, {hint}")
        raise UsageError(f"{name}: unknown task")

    finder = functools.partial(packages_module.discover_packages, source_glob=config.sources)
    task.validate_inputs(inputs, find_packages=finder)
    task.execute(inputs)


def _fail(error: BaseException) -> NoReturn:
    LOGGER.debug("error stack", exc_info=error)
    LOGGER.critical("%s", describe_error(error))
    raise typer.Exit(code=exit_code_for(error))


@app.command(context_settings=CONTEXT_SETTINGS, add_help_option=False)
def run(
    ctx: typer.Context,
    version: bool = typer.Option(False, "-v", "-version", help="Print version and exit."),
    config: Optional[str] = typer.Option(None, "-config", help="Config file to load instead of the defaults."),
    show_help: bool = typer.Option(False, "-h", "-help", "--help", help="Print usage."),
) -> None:
    """Run a task declared in the runner config."""

    load_dotenv_file()
    configure_from_env()

    if version:
        typer.echo(__version__)
        raise typer.Exit()

    runner_config: Optional[RunnerConfig] = None
    try:
        runner_config = load_config(config)
        if show_help:
            raise UsageError("help requested")
        dispatch(runner_config, list(ctx.args))
    except UsageError as error:
        print_usage(runner_config)
        _fail(error)
    except RunnerError as error:
        _fail(error)
    except Exception as error:  # noqa: BLE001
        LOGGER.critical("internal error: %s", describe_error(error), exc_info=True)
        raise typer.Exit(code=1) from error


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    app()
