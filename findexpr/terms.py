"""
Term parser.

Each token is scanned for an operator symbol using a fixed priority table.
Compound operators come before their one-character prefixes, otherwise
`pages>=10` would be read as `pages` `>` `=10`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Operator(Enum):
    """Search-string operators and the filter keys they compile to."""

    GTE = (">=", "$gte")
    LTE = ("<=", "$lte")
    GT = (">", "$gt")
    LT = ("<", "$lt")
    NOT_EQ = ("!:", "$ne")
    EQ = (":", None)

    def __init__(self, symbol: str, filter_key: str | None) -> None:
        self.symbol = symbol
        self.filter_key = filter_key

    @property
    def is_equality(self) -> bool:
        return self is Operator.EQ


# Detection order. Reordering this changes how terms parse.
OPERATOR_PRIORITY: tuple[Operator, ...] = (
    Operator.GTE,
    Operator.LTE,
    Operator.GT,
    Operator.LT,
    Operator.NOT_EQ,
    Operator.EQ,
)


@dataclass(frozen=True)
class Term:
    """One `field operator value` triple taken from a query."""

    field: str
    operator: Operator
    raw_value: str
    source: str


def detect_operator(token: str) -> Operator | None:
    """Return the first operator in priority order whose symbol occurs in the token."""
    for op in OPERATOR_PRIORITY:
        if op.symbol in token:
            return op
    return None


def parse_term(token: str) -> Term | None:
    """
    Parse a token into a Term.

    The token is split at the first occurrence of the detected operator, so the
    value keeps any later occurrences (`url:http://x` has value `http://x`).

    Returns:
        The parsed Term, or None when the token has no operator or no field name.
        Comparisons also need a value; an empty equality value is kept (`title:`).
    """
    op = detect_operator(token)
    if op is None:
        return None
    field, _, raw_value = token.partition(op.symbol)
    if not field:
        return None
    if not raw_value and not op.is_equality:
        return None
    return Term(field=field, operator=op, raw_value=raw_value, source=token)
