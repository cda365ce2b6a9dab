from __future__ import annotations

import textwrap

import pytest

from t0runner.config import parse_config
from t0runner.errors import DiscoveryError
from t0runner.tools import packages
from t0runner.usage import HEADER, print_usage, render_usage


def _config():
    return parse_config(
        {
            "tasks": [
                {"name": "vet", "package": True, "exec": ["go vet"]},
                {"name": "lint", "exec": ["ruff check"]},
                {"name": "test", "package": True, "exec": ["pytest"]},
            ]
        }
    )


def test_render_usage_lists_every_section() -> None:
    text = render_usage(_config(), ["clock", "logging"])

    expected_tail = textwrap.dedent(
        """
        package tasks:
        ./run vet
        ./run test

        repository tasks:
        ./run lint

        packages:
        - clock
        - logging
        """
    )
    assert text.startswith(HEADER + "\n\n")
    assert expected_tail.strip() in text
    assert "environment variables:" in text
    assert ".env file is checked for environment variables." in text
    assert text.rstrip().endswith("default config files: .t0runnerrc.yml, .t0runnerrc.yaml")


def test_render_usage_omits_empty_sections() -> None:
    config = parse_config({"tasks": [{"name": "lint", "exec": ["ruff check"]}]})

    text = render_usage(config, [])

    assert "package tasks:" not in text
    assert "packages:" not in text
    assert "repository tasks:\n./run lint" in text


def test_render_usage_without_config() -> None:
    text = render_usage(None, [])

    assert "tasks:" not in text
    assert "custom config: ./run -config <file>" in text


def test_print_usage_reports_discovery_failure(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def broken(**_: object):
        raise DiscoveryError("walking . for *.py files")

    monkeypatch.setattr(packages, "discover_packages", broken)

    print_usage(_config())

    out = capsys.readouterr().out
    assert "finding packages: error:" in out
    assert "package tasks:" in out
