from __future__ import annotations

import pytest

from t0runner.utils.suggest import SUGGESTION_LIMIT, did_you_mean, rank_match


def test_rank_match_scores_subsequences_and_rejects_the_rest() -> None:
    assert rank_match("bld", "build") == 60
    assert rank_match("BUILD", "build") == 100
    assert rank_match("xyz", "build") == -1
    assert rank_match("ab", "") == -1


def test_did_you_mean_suggests_closest_task() -> None:
    phrase, found = did_you_mean("buil", ["lint", "test", "build"])

    assert found
    assert phrase == "did you mean: 'build'?"


def test_did_you_mean_trims_input_until_something_matches() -> None:
    phrase, found = did_you_mean("xbuild", ["lint", "build"])

    assert found
    assert phrase == "did you mean: 'build'?"


def test_did_you_mean_orders_by_score_and_joins_with_commas() -> None:
    phrase, found = did_you_mean("lint", ["lint-all", "lint"])

    assert found
    assert phrase == "did you mean: 'lint', 'lint-all'?"


def test_did_you_mean_caps_the_number_of_suggestions() -> None:
    candidates = [f"a{index}" for index in range(SUGGESTION_LIMIT + 2)]
    phrase, found = did_you_mean("a", candidates)

    assert found
    assert phrase.count("'") == 2 * SUGGESTION_LIMIT
    assert "'a0'" in phrase
    assert "'a6'" not in phrase


@pytest.mark.parametrize(
    ("value", "candidates"),
    [
        ("anything", []),
        ("", ["build"]),
        ("qq", ["build", "lint"]),
    ],
)
def test_did_you_mean_without_suggestion(value: str, candidates: list[str]) -> None:
    assert did_you_mean(value, candidates) == ("", False)


def test_did_you_mean_falls_back_to_shared_character_pairs() -> None:
    phrase, found = did_you_mean("xyab", ["zzabzz", "qqqq"])

    assert found
    assert phrase == "did you mean: 'zzabzz'?"


@pytest.mark.parametrize(
    ("query", "candidates"),
    [
        ("xyab", ["zzabzz"]),
        ("serverx", ["cmd/server", "pkg/client"]),
        ("pkgclient", ["client", "lib/util"]),
        ("qwerty", ["rty", "abc"]),
        ("Logging", ["logging", "clock"]),
        ("zzzhuezzz", ["hue"]),
    ],
)
def test_shared_pair_always_yields_a_phrase(query: str, candidates: list[str]) -> None:
    phrase, found = did_you_mean(query, candidates)

    assert found
    assert phrase.startswith("did you mean:")
    assert phrase.endswith("?")
