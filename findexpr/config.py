"""
Environment configuration.

Settings:
- FINDEXPR_MATCHING: `unanchored` (default) or `anchored`
- FINDEXPR_UNPARSED: `drop` (default) or `error`
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import TypeVar

from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .policies import MatchMode, Policies, UnparsedTermPolicy

MATCHING_ENV = "FINDEXPR_MATCHING"
UNPARSED_ENV = "FINDEXPR_UNPARSED"

E = TypeVar("E", bound=Enum)


def _read_enum(environ: Mapping[str, str], name: str, enum_type: type[E], default: E) -> E:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    try:
        return enum_type(value)
    except ValueError:
        raise ConfigurationError(name, raw, [member.value for member in enum_type]) from None


def policies_from_env(environ: Mapping[str, str] | None = None) -> Policies:
    """Build Policies from environment variables (defaults when unset)."""
    env = os.environ if environ is None else environ
    return Policies(
        matching=_read_enum(env, MATCHING_ENV, MatchMode, MatchMode.UNANCHORED),
        unparsed=_read_enum(env, UNPARSED_ENV, UnparsedTermPolicy, UnparsedTermPolicy.DROP),
    )


def load_dotenv_file(path: Path) -> bool:
    """Load a `.env` file into the process environment without overriding set values."""
    if not path.exists():
        return False
    return load_dotenv(dotenv_path=path, override=False)
