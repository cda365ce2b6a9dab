"""Config-driven task runner for workspace automation."""

from .config import RunnerConfig, load_config
from .errors import (
    ConfigError,
    DiscoveryError,
    ExecError,
    PreconditionError,
    RunnerError,
    UsageError,
)
from .task import Task

__version__ = "0.2.0"

__all__ = [
    "ConfigError",
    "DiscoveryError",
    "ExecError",
    "PreconditionError",
    "RunnerConfig",
    "RunnerError",
    "Task",
    "UsageError",
    "__version__",
    "load_config",
]
