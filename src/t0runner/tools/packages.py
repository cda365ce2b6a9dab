"""Workspace package discovery.

A package is a directory holding at least one source file, where the file sits
two or three levels below the workspace root.  The root itself never counts.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from pathlib import Path
from typing import List, Pattern

from ..errors import DiscoveryError

DEFAULT_SOURCE_GLOB = "*.py"
MIN_FILE_DEPTH = 2
MAX_FILE_DEPTH = 3

IGNORE_PATTERN: Pattern[str] = re.compile(r"test$|\.local.*|cmd/template|^cmd$")

LOGGER = logging.getLogger(__name__)


def _file_parents(root: Path, source_glob: str) -> List[str]:
    """Return parent directories of qualifying files in walk order."""

    def _fail(error: OSError) -> None:
        raise DiscoveryError(f"walking {root} for {source_glob} files") from error

    parents: List[str] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_fail):
        dirnames.sort()
        relative = Path(dirpath).relative_to(root)
        depth = len(relative.parts)
        if depth >= MAX_FILE_DEPTH - 1:
            dirnames.clear()
        if depth + 1 < MIN_FILE_DEPTH:
            continue
        if any(fnmatch.fnmatch(name, source_glob) for name in filenames):
            parents.append(relative.as_posix())
    return parents


def discover_packages(root: Path | str = ".", *, source_glob: str = DEFAULT_SOURCE_GLOB) -> List[str]:
    """Return the sorted, de-duplicated packages found under ``root``."""

    root_path = Path(root)
    if not root_path.is_dir():
        raise DiscoveryError(f"workspace root is not a directory: {root_path}")

    found = _file_parents(root_path, source_glob)
    LOGGER.debug("package candidates: %s", found)

    packages: List[str] = []
    seen: set[str] = set()
    for candidate in found:
        if candidate.startswith("./"):
            candidate = candidate[2:]
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        if IGNORE_PATTERN.search(candidate):
            LOGGER.debug("ignored %s", candidate)
            continue
        packages.append(candidate)

    packages.sort()
    return packages


__all__ = ["DEFAULT_SOURCE_GLOB", "IGNORE_PATTERN", "discover_packages"]
