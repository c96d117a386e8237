from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Literal

from findexpr.config import load_dotenv_file, policies_from_env
from findexpr.exceptions import FindExprError
from findexpr.policies import MatchMode, Policies, UnparsedTermPolicy

from .errors import CLIError
from .results import CommandMeta, CommandResult, ErrorInfo

OutputFormat = Literal["table", "json"]


@dataclass
class CLIContext:
    output: OutputFormat
    quiet: bool
    verbosity: int
    dotenv: bool
    env_file: Path

    _dotenv_loaded: bool = field(default=False, repr=False)

    def load_dotenv_if_requested(self) -> None:
        if not self.dotenv or self._dotenv_loaded:
            return
        self._dotenv_loaded = True
        if not load_dotenv_file(self.env_file):
            raise CLIError(
                f"Env file not found: {self.env_file}",
                exit_code=2,
                error_type="usage_error",
            )

    def resolve_policies(self, *, anchored: bool = False, strict: bool = False) -> Policies:
        """Environment settings, with command flags taking precedence."""
        self.load_dotenv_if_requested()
        base = policies_from_env()
        return Policies(
            matching=MatchMode.ANCHORED if anchored else base.matching,
            unparsed=UnparsedTermPolicy.ERROR if strict else base.unparsed,
        )


def normalize_exception(exc: Exception) -> Exception:
    """Translate compiler errors into CLIError; other exceptions pass through."""
    if isinstance(exc, FindExprError):
        return CLIError(
            exc.message,
            exit_code=2,
            error_type=exc.error_type,
            hint=exc.hint,
            details=exc.details() or None,
        )
    return exc


def exit_code_for_exception(exc: Exception) -> int:
    if isinstance(exc, CLIError):
        return exc.exit_code
    return 1


def error_info_for_exception(exc: Exception) -> ErrorInfo:
    if isinstance(exc, CLIError):
        return ErrorInfo(
            type=exc.error_type,
            message=exc.message,
            hint=exc.hint,
            details=exc.details,
        )
    return ErrorInfo(type="internal_error", message=str(exc) or exc.__class__.__name__)


def policies_meta(policies: Policies | None) -> dict[str, str] | None:
    if policies is None:
        return None
    return {"matching": policies.matching.value, "unparsed": policies.unparsed.value}


def build_result(
    *,
    ok: bool,
    command: str,
    started_at: float,
    data: Any | None,
    warnings: list[str],
    policies: Policies | None = None,
    error: ErrorInfo | None = None,
) -> CommandResult:
    duration_ms = int(max(0.0, (time.time() - started_at) * 1000))
    meta = CommandMeta(duration_ms=duration_ms, policies=policies_meta(policies))
    return CommandResult(
        ok=ok,
        command=command,
        data=data,
        warnings=warnings,
        meta=meta,
        error=error,
    )
