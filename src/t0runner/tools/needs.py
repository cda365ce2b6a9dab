"""Precondition checks a task can declare in its ``needs`` field."""

from __future__ import annotations

import http.client
import logging
import subprocess
import urllib.error
import urllib.request
from typing import Callable, Dict, List

from ..errors import ConfigError, PreconditionError

NEED_GIT_CLEAN = "<git-clean>"
NEED_ONLINE = "<online>"

ONLINE_URL = "https://1.1.1.1"  # cloudflare
ONLINE_TIMEOUT = 10.0

LOGGER = logging.getLogger(__name__)

NeedCheck = Callable[[], None]


def check_git_clean() -> None:
    """Require ``git diff --exit-code`` to succeed in the working directory."""
    try:
        process = subprocess.run(
            ["git", "diff", "--exit-code"],
            capture_output=True,
            check=False,
        )
    except OSError as error:
        raise PreconditionError("please commit or stash all changes") from error

    if process.returncode != 0:
        LOGGER.debug("git diff --exit-code: exit status %s", process.returncode)
        raise PreconditionError("please commit or stash all changes")


def check_online(url: str = ONLINE_URL, *, timeout: float = ONLINE_TIMEOUT) -> None:
    """Require a GET of ``url`` to reach a server; the body is discarded."""
    request = urllib.request.Request(url, method="GET")
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response:
            LOGGER.debug("online check %s: status %s", url, getattr(response, "status", "?"))
    except urllib.error.HTTPError as error:
        # a status code means the server answered
        LOGGER.debug("online check %s: status %s", url, error.code)
        error.close()
    except (urllib.error.URLError, http.client.HTTPException, OSError) as error:
        raise PreconditionError("please check your internet connection") from error


NEED_CHECKS: Dict[str, NeedCheck] = {
    NEED_GIT_CLEAN: check_git_clean,
    NEED_ONLINE: check_online,
}


def parse_needs(needs: str) -> List[str]:
    """Split a comma-separated needs string, dropping empty elements."""
    return [token.strip() for token in needs.split(",") if token.strip()]


def run_needs(needs: str) -> None:
    """Run each declared need in order, stopping at the first failure."""
    for need in parse_needs(needs):
        check = NEED_CHECKS.get(need)
        if check is None:
            raise ConfigError(f"unknown need: {need}")
        LOGGER.debug("checking need %s", need)
        check()


__all__ = [
    "NEED_CHECKS",
    "NEED_GIT_CLEAN",
    "NEED_ONLINE",
    "ONLINE_URL",
    "check_git_clean",
    "check_online",
    "parse_needs",
    "run_needs",
]
