"""Runner configuration: the typed model and the file loader."""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any, List, Optional, Sequence

import yaml
from pydantic import Field, ValidationError, model_validator

from .errors import ConfigError, UsageError
from .task import RecordModel, Task
from .tools.packages import DEFAULT_SOURCE_GLOB

DEFAULT_CONFIG_FILES: tuple[str, ...] = (".t0runnerrc.yml", ".t0runnerrc.yaml")

LOGGER = logging.getLogger(__name__)


class RunnerConfig(RecordModel):
    """Parsed runner config file."""

    version: str = ""
    sources: str = DEFAULT_SOURCE_GLOB
    tasks: List[Task] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_task_names(self) -> "RunnerConfig":
        counts = Counter(task.name for task in self.tasks)
        duplicates = sorted(name for name, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate task names: {', '.join(duplicates)}")
        return self

    def find_task(self, name: str) -> Optional[Task]:
        for task in self.tasks:
            if task.name == name:
                return task
        return None

    def task_names(self) -> List[str]:
        return [task.name for task in self.tasks]

    def package_tasks(self) -> List[Task]:
        return [task for task in self.tasks if task.package]

    def repository_tasks(self) -> List[Task]:
        return [task for task in self.tasks if not task.package]


def resolve_config_path(
    explicit: Optional[str] = None,
    *,
    defaults: Sequence[str] = DEFAULT_CONFIG_FILES,
    cwd: Optional[Path] = None,
) -> Path:
    """Pick the explicit config path, else the first default that exists."""

    base = cwd or Path.cwd()
    if explicit:
        candidate = Path(explicit)
        if not candidate.is_absolute():
            candidate = base / candidate
        if not candidate.is_file():
            raise UsageError(f"config file not found: {explicit}")
        return candidate

    for name in defaults:
        candidate = base / name
        if candidate.is_file():
            return candidate

    raise UsageError("config file not found")


def parse_config(data: Any, *, source: str = "<memory>") -> RunnerConfig:
    """Validate raw YAML data into a :class:`RunnerConfig`."""

    if data is None:
        raise ConfigError(f"{source}: config file is empty")
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: configuration must be a mapping at the top level")
    if data.get("version") is not None and not isinstance(data["version"], str):
        data = {**data, "version": str(data["version"])}

    try:
        return RunnerConfig.model_validate(data)
    except ValidationError as error:
        raise ConfigError(f"{source}: invalid config") from error


def load_config(
    explicit: Optional[str] = None,
    *,
    defaults: Sequence[str] = DEFAULT_CONFIG_FILES,
    cwd: Optional[Path] = None,
) -> RunnerConfig:
    """Locate, read and validate the runner config."""

    config_path = resolve_config_path(explicit, defaults=defaults, cwd=cwd)
    LOGGER.debug("loading config %s", config_path)

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data: Any = yaml.safe_load(handle)
    except yaml.YAMLError as error:
        raise ConfigError(f"{config_path.name}: failed to parse config") from error
    except UnicodeDecodeError as error:
        raise ConfigError(f"{config_path.name}: failed to decode config") from error
    except OSError as error:
        raise ConfigError(f"{config_path.name}: failed to read config") from error

    return parse_config(data, source=config_path.name)


__all__ = [
    "DEFAULT_CONFIG_FILES",
    "RunnerConfig",
    "load_config",
    "parse_config",
    "resolve_config_path",
]
