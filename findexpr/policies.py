"""
Compiler policies (behavioral controls).

Policies are orthogonal and composable. They are read once per compile call and
never mutated, so a single instance can be shared across threads.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MatchMode(Enum):
    """How the number/boolean patterns are matched against a raw value."""

    # Pattern may occur anywhere in the value ("40x" is a number).
    UNANCHORED = "unanchored"
    # Pattern must cover the whole value ("40x" is a string).
    ANCHORED = "anchored"


class UnparsedTermPolicy(Enum):
    """What to do with a term that contains no recognized operator."""

    DROP = "drop"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class Policies:
    """Policy bundle applied to a compile call."""

    matching: MatchMode = MatchMode.UNANCHORED
    unparsed: UnparsedTermPolicy = UnparsedTermPolicy.DROP
