"""
Filter document model and merge rules.

A field holds either a single equality value (Scalar) or a set of comparison
operators (OperatorSet). Comparisons on the same field merge; equality never
merges. The full behavior is the MERGE_RULES table below.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .coercion import CoercedValue
from .exceptions import FieldConflictError
from .terms import Term

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scalar:
    """An equality constraint."""

    value: CoercedValue

    def to_json(self) -> Any:
        return self.value


@dataclass
class OperatorSet:
    """Comparison constraints on one field, keyed by filter operator (`$gt`, ...)."""

    ops: dict[str, CoercedValue] = field(default_factory=dict)

    def to_json(self) -> Any:
        return dict(self.ops)


FilterValue = Scalar | OperatorSet


class Slot(Enum):
    """State of a field before a term is applied."""

    ABSENT = "absent"
    SCALAR = "scalar"
    OPERATOR_SET = "operator set"


class Action(Enum):
    INSERT = "insert"
    MERGE = "merge"
    CONFLICT = "conflict"


# (current slot, incoming term is equality) -> action
MERGE_RULES: dict[tuple[Slot, bool], Action] = {
    (Slot.ABSENT, True): Action.INSERT,
    (Slot.ABSENT, False): Action.INSERT,
    (Slot.SCALAR, True): Action.CONFLICT,
    (Slot.SCALAR, False): Action.CONFLICT,
    (Slot.OPERATOR_SET, True): Action.CONFLICT,
    (Slot.OPERATOR_SET, False): Action.MERGE,
}


def _slot_of(value: FilterValue | None) -> Slot:
    if value is None:
        return Slot.ABSENT
    if isinstance(value, Scalar):
        return Slot.SCALAR
    return Slot.OPERATOR_SET


def _describe(term: Term) -> str:
    if term.operator.is_equality:
        return "equality"
    return f"'{term.operator.filter_key}' comparison"


class FilterDocument:
    """Insertion-ordered mapping of field name to filter value."""

    def __init__(self) -> None:
        self._fields: dict[str, FilterValue] = {}

    def add(self, term: Term, value: CoercedValue) -> None:
        """
        Apply a parsed term with its coerced value.

        Raises:
            FieldConflictError: If the merge rules forbid combining the term with
                what the field already holds.
        """
        current = self._fields.get(term.field)
        slot = _slot_of(current)
        action = MERGE_RULES[(slot, term.operator.is_equality)]

        if action is Action.CONFLICT:
            raise FieldConflictError(term.field, existing=slot.value, incoming=_describe(term))

        if action is Action.INSERT:
            if term.operator.is_equality:
                self._fields[term.field] = Scalar(value)
            else:
                self._fields[term.field] = OperatorSet({term.operator.filter_key: value})
            return

        assert isinstance(current, OperatorSet)
        key = term.operator.filter_key
        if key in current.ops:
            logger.debug("Overwriting %s on field %r", key, term.field)
        current.ops[key] = value

    def to_dict(self) -> dict[str, Any]:
        """Plain nested dict, in field insertion order."""
        return {name: value.to_json() for name, value in self._fields.items()}

    def __getitem__(self, name: str) -> FilterValue:
        return self._fields[name]

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FilterDocument({self.to_dict()!r})"
