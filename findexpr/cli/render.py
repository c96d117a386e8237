from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .results import CommandResult


@dataclass(frozen=True, slots=True)
class RenderSettings:
    output: str  # "table" | "json"
    quiet: bool
    verbosity: int


def _error_title(error_type: str) -> str:
    mapping = {
        "usage_error": "Usage error",
        "field_conflict": "Conflicting constraints",
        "value_coercion": "Invalid value",
        "unparsed_term": "Unparsed term",
        "configuration_error": "Configuration error",
        "internal_error": "Internal error",
    }
    return mapping.get((error_type or "").strip(), "Error")


def _format_value(value: Any) -> str:
    # JSON form keeps 400.0 / true / "text" distinguishable in the table.
    return json.dumps(value, ensure_ascii=False)


def _value_type(value: Any) -> str:
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        return "number"
    return "string"


def _terms_table(terms: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, header_style="bold")
    table.add_column("field")
    table.add_column("op")
    table.add_column("raw")
    table.add_column("value")
    table.add_column("type")
    for term in terms:
        value = term.get("value")
        table.add_row(
            Text(str(term.get("field", ""))),
            Text(str(term.get("operator", ""))),
            Text(str(term.get("rawValue", ""))),
            Text(_format_value(value)),
            _value_type(value),
        )
    return table


def render_result(result: CommandResult, *, settings: RenderSettings) -> int:
    stdout = Console(file=sys.stdout, force_terminal=False)
    stderr = Console(file=sys.stderr, force_terminal=False)

    if settings.output == "json":
        payload = result.model_dump(by_alias=True, mode="json")
        sys.stdout.write(json.dumps(payload, ensure_ascii=False) + "\n")
        return 0

    if not result.ok:
        if result.error is not None:
            title = _error_title(result.error.type)
            stderr.print(Text(f"{title}: {result.error.message}"))
            if result.error.hint and not settings.quiet:
                stderr.print(Text(f"Hint: {result.error.hint}"))
        else:
            stderr.print("Error")
        return 0

    data = result.data if isinstance(result.data, dict) else {}
    if result.command == "compile":
        # The filter is wire text; bypass rich so nothing wraps or restyles it.
        sys.stdout.write(str(data.get("filter", "")) + "\n")
    elif result.command == "explain":
        terms = data.get("terms") or []
        if terms:
            stdout.print(_terms_table(terms))
        for token in data.get("droppedTerms") or []:
            stdout.print(Text(f"dropped: {token}", style="dim"))
        stdout.print(Text(str(data.get("filter", "")), style="bold"), soft_wrap=True)
    elif result.command == "version":
        stdout.print(Text(str(data.get("version", "")), style="bold"))
    elif result.data is not None:
        stdout.print(Text(json.dumps(result.data, ensure_ascii=False)), soft_wrap=True)

    return 0
