"""Fuzzy "did you mean" hints for unknown task and package names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

SUGGESTION_LIMIT = 5


@dataclass(slots=True)
class _Match:
    word: str
    score: int


def rank_match(source: str, target: str) -> int:
    """Score how well ``source`` matches ``target``, case-insensitively.

    ``source`` must appear in ``target`` as a subsequence; otherwise ``-1`` is
    returned.  Matches score ``0..100``, higher meaning the query covers more of
    the candidate.
    """

    source = source.lower()
    target = target.lower()
    if not target:
        return -1

    position = 0
    for char in source:
        position = target.find(char, position)
        if position == -1:
            return -1
        position += 1

    return 100 * len(source) // len(target)


def _windows(value: str) -> set[str]:
    return {value[index : index + 2] for index in range(len(value) - 1)}


def _bigram_matches(query: str, candidates: Sequence[str]) -> List[_Match]:
    query_windows = _windows(query)
    matches: List[_Match] = []
    for candidate in candidates:
        shared = len(query_windows & _windows(candidate.lower()))
        if shared:
            matches.append(_Match(word=candidate, score=shared))
    return matches


def _rank_all(query: str, candidates: Sequence[str]) -> List[_Match]:
    matches: List[_Match] = []
    for candidate in candidates:
        score = rank_match(query, candidate)
        if score != -1:
            matches.append(_Match(word=candidate, score=score))
    return matches


def did_you_mean(value: str, candidates: Sequence[str]) -> Tuple[str, bool]:
    """Return a ``did you mean: 'a', 'b'?`` phrase and whether one was found.

    The query is lowercased and ranked against every candidate.  While nothing
    matches, one character is trimmed per attempt, alternating tail and head,
    for at most ``len(value)`` attempts.  When trimming runs out, candidates
    sharing a two-character window with the query are offered instead.
    """

    query = value.lower()
    if not query or not candidates:
        return "", False

    matches: List[_Match] = []
    attempt_input = query
    for attempt in range(len(query)):
        matches = _rank_all(attempt_input, candidates)
        if matches:
            break
        # even attempts drop the last character, odd attempts the first
        if attempt % 2 == 0:
            attempt_input = attempt_input[:-1]
        else:
            attempt_input = attempt_input[1:]

    if not matches:
        matches = _bigram_matches(query, candidates)
    if not matches:
        return "", False

    matches.sort(key=lambda match: match.score, reverse=True)
    matches = matches[:SUGGESTION_LIMIT]

    quoted = ", ".join(f"'{match.word}'" for match in matches)
    return f"did you mean: {quoted}?", True


__all__ = ["SUGGESTION_LIMIT", "did_you_mean", "rank_match"]
