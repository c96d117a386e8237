from __future__ import annotations

import click
import rich_click

from findexpr.compiler import compile_report

from ..context import CLIContext
from ..options import json_option, policy_options
from ..runner import CommandOutput, run_command


@click.command(name="explain", cls=rich_click.RichCommand)
@click.argument("query")
@policy_options
@json_option
@click.pass_obj
def explain_cmd(ctx: CLIContext, query: str, *, anchored: bool, strict: bool) -> None:
    """Show how each term of a search string is parsed and coerced."""

    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        policies = ctx.resolve_policies(anchored=anchored, strict=strict)
        report = compile_report(query, policies)
        return CommandOutput(
            data=report.model_dump(by_alias=True, mode="json"),
            policies=policies,
        )

    run_command(ctx, command="explain", fn=fn)
