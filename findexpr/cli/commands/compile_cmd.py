from __future__ import annotations

import click
import rich_click

from findexpr.compiler import compile_report

from ..context import CLIContext
from ..options import json_option, policy_options
from ..runner import CommandOutput, run_command


@click.command(name="compile", cls=rich_click.RichCommand)
@click.argument("query")
@policy_options
@json_option
@click.pass_obj
def compile_cmd(ctx: CLIContext, query: str, *, anchored: bool, strict: bool) -> None:
    """Compile a search string to a filter document.

    Example: findexpr compile 'title:"The Great Gatsby" pages<250'
    """

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        policies = ctx.resolve_policies(anchored=anchored, strict=strict)
        report = compile_report(query, policies)
        return CommandOutput(
            data=report.model_dump(by_alias=True, mode="json"),
            warnings=report.warnings,
            policies=policies,
        )

    run_command(ctx, command="compile", fn=fn)
