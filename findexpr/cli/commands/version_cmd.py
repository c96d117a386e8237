from __future__ import annotations

import platform

import click
import rich_click

import findexpr

from ..context import CLIContext
from ..options import json_option
from ..runner import CommandOutput, run_command


@click.command(name="version", cls=rich_click.RichCommand)
@json_option
@click.pass_obj
def version_cmd(ctx: CLIContext) -> None:
    def fn(_: CLIContext, _warnings: list[str]) -> CommandOutput:
        data = {
            "version": findexpr.__version__,
            "pythonVersion": platform.python_version(),
            "platform": platform.platform(),
        }
        return CommandOutput(data=data)

    run_command(ctx, command="version", fn=fn)
