"""Options shared by the compile/explain/version commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

import click

from .context import CLIContext

F = TypeVar("F", bound=Callable[..., object])


def _json_after_subcommand(ctx: click.Context, _param: click.Parameter, value: bool) -> bool:
    # `findexpr compile --json ...` behaves like `findexpr --json compile ...`.
    if value and isinstance(ctx.obj, CLIContext):
        ctx.obj.output = "json"
    return value


json_option = click.option(
    "--json",
    is_flag=True,
    help="Emit the JSON result envelope.",
    callback=_json_after_subcommand,
    expose_value=False,
)


def policy_options(fn: F) -> F:
    """Add --anchored/--strict, which override the FINDEXPR_* environment settings."""
    fn = click.option(
        "--anchored",
        is_flag=True,
        help="Only treat whole values as numbers/booleans (overrides FINDEXPR_MATCHING).",
    )(fn)
    fn = click.option(
        "--strict",
        is_flag=True,
        help="Fail on terms that do not parse instead of ignoring them.",
    )(fn)
    return fn
