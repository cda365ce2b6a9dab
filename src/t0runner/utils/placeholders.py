"""Placeholder substitution for exec argv words and env pairs.

The placeholder set is closed; unknown ``<...>`` tokens pass through verbatim.
"""

from __future__ import annotations

import logging
import os
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

VAR_PACKAGE = "<package>"  # the package passed as input
VAR_INHERIT = "<inherit>"  # copy this from the runner's environment
VAR_SPACE = "<space>"  # single whitespace
ESCAPED_HASH = "\\#"  # literal # is read as a yaml comment otherwise

PLACEHOLDERS: Tuple[str, ...] = (VAR_PACKAGE, VAR_INHERIT, VAR_SPACE)

LOGGER = logging.getLogger(__name__)


def substitute_word(word: str, package: str) -> str:
    """Rewrite a single argv word."""
    word = word.replace(VAR_PACKAGE, package)
    word = word.replace(VAR_SPACE, " ")
    return word.replace(ESCAPED_HASH, "#")


def substitute_argv(words: Iterable[str], package: str) -> List[str]:
    return [substitute_word(word, package) for word in words]


def split_pair(pair: str) -> Tuple[str, str]:
    key, _, value = pair.partition("=")
    return key, value


def substitute_env_pair(
    pair: str,
    package: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> str:
    """Rewrite one ``KEY=VALUE`` pair.

    Only the first ``<package>`` and the first ``<inherit>`` are replaced.  An
    inherited key that is unset in ``environ`` becomes the empty string.
    """

    source = os.environ if environ is None else environ
    key, value = split_pair(pair)

    if VAR_PACKAGE in value:
        value = value.replace(VAR_PACKAGE, package, 1)

    if VAR_INHERIT in value:
        inherited = source.get(key)
        if inherited is None:
            LOGGER.debug("env value inherited is empty: %s", key)
            inherited = ""
        value = value.replace(VAR_INHERIT, inherited, 1)

    return f"{key}={value}"


def build_env(
    pairs: Sequence[str],
    package: str,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Compose a child environment from ``pairs`` alone."""
    env: Dict[str, str] = {}
    for pair in pairs:
        key, value = split_pair(substitute_env_pair(pair, package, environ=environ))
        env[key] = value
    return env


__all__ = [
    "ESCAPED_HASH",
    "PLACEHOLDERS",
    "VAR_INHERIT",
    "VAR_PACKAGE",
    "VAR_SPACE",
    "build_env",
    "split_pair",
    "substitute_argv",
    "substitute_env_pair",
    "substitute_word",
]
