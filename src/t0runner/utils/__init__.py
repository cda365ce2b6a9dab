"""Utility helpers shared across the runner."""

from .placeholders import build_env, substitute_argv, substitute_env_pair, substitute_word
from .suggest import did_you_mean, rank_match

__all__ = [
    "build_env",
    "did_you_mean",
    "rank_match",
    "substitute_argv",
    "substitute_env_pair",
    "substitute_word",
]
