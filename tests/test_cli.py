from __future__ import annotations

import json
from pathlib import Path

import pytest

pytest.importorskip("rich_click")
pytest.importorskip("rich")

from click.testing import CliRunner, Result

import findexpr
from findexpr.cli.main import cli

CLEAN_ENV = {"FINDEXPR_MATCHING": "", "FINDEXPR_UNPARSED": ""}


def _invoke(args: list[str], env: dict[str, str] | None = None) -> Result:
    runner = CliRunner()
    return runner.invoke(cli, args, env={**CLEAN_ENV, **(env or {})})


def test_cli_no_args_shows_help() -> None:
    result = _invoke([])
    assert result.exit_code == 0
    assert "Usage:" in result.output


def test_cli_version_table_output() -> None:
    result = _invoke(["version"])
    assert result.exit_code == 0
    assert findexpr.__version__ in result.stdout


def test_compile_prints_filter_text() -> None:
    result = _invoke(["compile", "pages>100 pages<500"])
    assert result.exit_code == 0
    assert result.stdout.strip() == '{"pages":{"$gt":100.0,"$lt":500.0}}'


def test_compile_long_filter_is_not_wrapped() -> None:
    query = " ".join(f'field_{c}:"a fairly long value {c}"' for c in "abcdefgh")
    result = _invoke(["compile", query])
    assert result.exit_code == 0
    assert result.stdout.count("\n") == 1


def test_compile_json_envelope() -> None:
    result = _invoke(["compile", "--json", "isValid:true junk"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["ok"] is True
    assert payload["command"] == "compile"
    assert payload["data"]["filter"] == '{"isValid":true}'
    assert payload["data"]["droppedTerms"] == ["junk"]
    assert len(payload["warnings"]) == 1
    assert payload["meta"]["policies"] == {"matching": "unanchored", "unparsed": "drop"}
    assert payload["data"]["terms"][0]["token"] == "isValid:true"


def test_global_json_flag() -> None:
    result = _invoke(["--json", "compile", "a:1"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"]["document"] == {"a": 1.0}


def test_conflict_exits_with_usage_code() -> None:
    result = _invoke(["compile", "--json", "pages:1 pages:2"])
    assert result.exit_code == 2
    payload = json.loads(result.stdout.strip())
    assert payload["ok"] is False
    assert payload["error"]["type"] == "field_conflict"
    assert payload["error"]["details"]["field"] == "pages"


def test_conflict_table_output_goes_to_stderr() -> None:
    result = _invoke(["compile", "pages:1 pages:2"])
    assert result.exit_code == 2
    assert result.stdout == ""


def test_strict_flag_rejects_unparsed_terms() -> None:
    result = _invoke(["compile", "--strict", "--json", "pages > 400"])
    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"]["type"] == "unparsed_term"


def test_anchored_flag() -> None:
    result = _invoke(["compile", "--anchored", "year:40x"])
    assert result.exit_code == 0
    assert result.stdout.strip() == '{"year":"40x"}'


def test_unanchored_default_reports_coercion_error() -> None:
    result = _invoke(["compile", "--json", "year:40x"])
    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"]["type"] == "value_coercion"


def test_matching_from_environment() -> None:
    result = _invoke(["compile", "year:40x"], env={"FINDEXPR_MATCHING": "anchored"})
    assert result.exit_code == 0
    assert result.stdout.strip() == '{"year":"40x"}'


def test_invalid_environment_value() -> None:
    result = _invoke(["compile", "--json", "a:1"], env={"FINDEXPR_MATCHING": "fuzzy"})
    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"]["type"] == "configuration_error"


def test_dotenv_missing_file_is_usage_error(tmp_path: Path) -> None:
    missing = tmp_path / "nope.env"
    result = _invoke(["--dotenv", "--env-file", str(missing), "compile", "--json", "a:1"])
    assert result.exit_code == 2
    assert json.loads(result.stdout)["error"]["type"] == "usage_error"


def test_explain_renders_terms() -> None:
    result = _invoke(["explain", 'title:"Engineering" pages>5 junk'])
    assert result.exit_code == 0
    assert "title" in result.stdout
    assert "dropped: junk" in result.stdout
    assert '{"title":"Engineering","pages":{"$gt":5.0}}' in result.stdout


def test_explain_json_flag_after_subcommand() -> None:
    result = _invoke(["explain", "--json", "title:"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip())
    assert payload["command"] == "explain"
    assert payload["data"]["filter"] == '{"title":""}'
    assert payload["data"]["terms"][0]["token"] == "title:"


def test_subcommand_has_no_output_option() -> None:
    result = _invoke(["compile", "--output", "json", "a:1"])
    assert result.exit_code == 2
