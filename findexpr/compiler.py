"""
Search-string compiler.

Turns a human-typed query into the filter document a MongoDB-style find
endpoint expects:

    >>> compile_query('title:"The Great Gatsby" pages<250')
    '{"title":"The Great Gatsby","pages":{"$lt":250.0}}'

Every call builds its own state, so the functions here are safe to call from
any number of threads.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .coercion import CoercedValue, coerce_value
from .document import FilterDocument
from .exceptions import UnparsedTermError
from .policies import Policies, UnparsedTermPolicy
from .serializer import SerializerSettings, render
from .terms import Term, parse_term
from .tokenizer import split_terms

logger = logging.getLogger(__name__)


class _ReportModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
    )


class ParsedTerm(_ReportModel):
    token: str
    field: str
    operator: str
    raw_value: str = Field(..., alias="rawValue")
    value: bool | float | str


class CompileReport(_ReportModel):
    """Compiled filter plus the pieces it was built from."""

    filter_text: str = Field(..., alias="filter")
    document: dict[str, Any]
    terms: list[ParsedTerm] = Field(default_factory=list)
    dropped_terms: list[str] = Field(default_factory=list, alias="droppedTerms")
    warnings: list[str] = Field(default_factory=list)


@dataclass
class _Compilation:
    document: FilterDocument = field(default_factory=FilterDocument)
    applied: list[tuple[Term, CoercedValue]] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)


def _run(query: str | None, policies: Policies) -> _Compilation:
    result = _Compilation()
    for token in split_terms(query or ""):
        term = parse_term(token)
        if term is None:
            if policies.unparsed is UnparsedTermPolicy.ERROR:
                raise UnparsedTermError(token)
            logger.debug("Dropping unparsed term: %r", token)
            result.dropped.append(token)
            continue
        value = coerce_value(term.raw_value, matching=policies.matching, field=term.field)
        result.document.add(term, value)
        result.applied.append((term, value))
    return result


def build_document(query: str | None, policies: Policies | None = None) -> FilterDocument:
    """Parse a query into a FilterDocument without rendering it."""
    return _run(query, policies or Policies()).document


def compile_query(
    query: str | None,
    policies: Policies | None = None,
    *,
    settings: SerializerSettings | None = None,
) -> str:
    """
    Compile a search string to compact filter JSON.

    An empty query, or one whose terms were all dropped, compiles to `{}`.

    Raises:
        FieldConflictError: If two terms put incompatible constraints on a field.
        ValueCoercionError: If a value is classified as a number or boolean but
            does not convert.
        UnparsedTermError: If a term has no operator and the policy is ERROR.
    """
    return render(build_document(query, policies), settings)


def compile_report(
    query: str | None,
    policies: Policies | None = None,
    *,
    settings: SerializerSettings | None = None,
) -> CompileReport:
    """Compile a search string and report the parsed and dropped terms."""
    compiled = _run(query, policies or Policies())
    warnings = [f"Ignored term that does not parse: {token!r}" for token in compiled.dropped]
    return CompileReport(
        filter_text=render(compiled.document, settings),
        document=compiled.document.to_dict(),
        terms=[
            ParsedTerm(
                token=term.source,
                field=term.field,
                operator=term.operator.symbol,
                raw_value=term.raw_value,
                value=value,
            )
            for term, value in compiled.applied
        ],
        dropped_terms=compiled.dropped,
        warnings=warnings,
    )
