from __future__ import annotations

import logging
import shutil
import subprocess
import sys
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@dataclass(slots=True)
class Workspace:
    """Fixture payload representing a synthetic workspace under test."""

    root: Path

    def write_config(self, body: str, name: str = ".t0runnerrc.yml") -> Path:
        path = self.root / name
        path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
        return path

    def add_source(self, relative: str, content: str = "VALUE = 1\n") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture(autouse=True)
def _reset_runner_logger():
    """Drop handlers installed by CLI runs so later tests see a clean logger."""

    yield
    logger = logging.getLogger("t0runner")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Workspace:
    """Create an empty workspace and make it the working directory."""

    root = tmp_path / "workspace"
    root.mkdir()
    monkeypatch.chdir(root)
    for name in ("T0_COLOR", "T0_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return Workspace(root=root)


@pytest.fixture()
def git_workspace(workspace: Workspace) -> Workspace:
    """Workspace that is also a git repository with one commit."""

    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    def run_git(*cmd: str) -> None:
        subprocess.run(
            ["git", *cmd],
            cwd=workspace.root,
            check=True,
            capture_output=True,
            text=True,
        )

    run_git("init")
    run_git("config", "user.email", "runner@example.com")
    run_git("config", "user.name", "Task Runner")
    workspace.add_source("README.md", "workspace fixture\n")
    run_git("add", ".")
    run_git("commit", "-m", "Initial workspace state")
    return workspace
