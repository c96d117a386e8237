"""
Search-string to filter-document compiler.

Example:
    from findexpr import compile_query

    compile_query("pages>100 pages<500")
    # '{"pages":{"$gt":100.0,"$lt":500.0}}'
"""

from __future__ import annotations

from .compiler import CompileReport, ParsedTerm, build_document, compile_query, compile_report
from .config import policies_from_env
from .document import FilterDocument, OperatorSet, Scalar
from .exceptions import (
    ConfigurationError,
    FieldConflictError,
    FindExprError,
    UnparsedTermError,
    ValueCoercionError,
)
from .policies import MatchMode, Policies, UnparsedTermPolicy
from .terms import OPERATOR_PRIORITY, Operator, Term, parse_term
from .tokenizer import split_terms

__version__ = "0.1.0"

__all__ = [
    "OPERATOR_PRIORITY",
    "CompileReport",
    "ConfigurationError",
    "FieldConflictError",
    "FilterDocument",
    "FindExprError",
    "MatchMode",
    "Operator",
    "OperatorSet",
    "ParsedTerm",
    "Policies",
    "Scalar",
    "Term",
    "UnparsedTermError",
    "UnparsedTermPolicy",
    "ValueCoercionError",
    "__version__",
    "build_document",
    "compile_query",
    "compile_report",
    "parse_term",
    "policies_from_env",
    "split_terms",
]
