"""Tests for environment configuration."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from findexpr.config import load_dotenv_file, policies_from_env
from findexpr.exceptions import ConfigurationError
from findexpr.policies import MatchMode, Policies, UnparsedTermPolicy


def test_defaults_when_unset() -> None:
    assert policies_from_env({}) == Policies()


def test_blank_values_use_defaults() -> None:
    assert policies_from_env({"FINDEXPR_MATCHING": "  "}) == Policies()


def test_reads_both_settings_case_insensitively() -> None:
    policies = policies_from_env({"FINDEXPR_MATCHING": "Anchored", "FINDEXPR_UNPARSED": "ERROR"})
    assert policies.matching is MatchMode.ANCHORED
    assert policies.unparsed is UnparsedTermPolicy.ERROR


def test_invalid_value_raises() -> None:
    with pytest.raises(ConfigurationError) as exc:
        policies_from_env({"FINDEXPR_UNPARSED": "warn"})
    assert exc.value.name == "FINDEXPR_UNPARSED"
    assert exc.value.allowed == ["drop", "error"]


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINDEXPR_MATCHING", "anchored")
    monkeypatch.delenv("FINDEXPR_UNPARSED", raising=False)
    assert policies_from_env().matching is MatchMode.ANCHORED


def test_missing_dotenv_file(tmp_path: Path) -> None:
    assert load_dotenv_file(tmp_path / "missing.env") is False


def test_dotenv_does_not_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FINDEXPR_MATCHING", "anchored")
    env_file = tmp_path / ".env"
    env_file.write_text("FINDEXPR_MATCHING=unanchored\n", encoding="utf-8")
    assert load_dotenv_file(env_file) is True
    assert os.environ["FINDEXPR_MATCHING"] == "anchored"
