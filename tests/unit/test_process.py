from __future__ import annotations

import shutil

import pytest

from t0runner.errors import ExecError
from t0runner.tools.process import CommandResult, resolve_program, run_command

pytestmark = pytest.mark.skipif(shutil.which("sh") is None, reason="POSIX shell required")


def test_run_command_collects_streams_separately() -> None:
    result = run_command(["sh", "-c", "echo out; echo err >&2; exit 3"])

    assert isinstance(result, CommandResult)
    assert result.stdout == "out\n"
    assert result.stderr == "err\n"
    assert result.returncode == 3
    assert result.failed


def test_run_command_replaces_environment() -> None:
    env_program = shutil.which("env")
    if env_program is None:
        pytest.skip("env is not installed")

    result = run_command(["env"], {"ONLY": "this"})

    assert result.stdout.splitlines() == ["ONLY=this"]


def test_resolve_program_rejects_unknown_and_empty() -> None:
    with pytest.raises(ExecError, match="not available"):
        resolve_program("definitely-not-installed-program")
    with pytest.raises(ExecError, match="empty program"):
        resolve_program("")


def test_run_command_rejects_empty_argv() -> None:
    with pytest.raises(ExecError):
        run_command([])
