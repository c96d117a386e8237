"""
Exceptions raised while compiling search strings.

All errors are deterministic input defects: compiling the same query again
raises the same error, so callers should report them rather than retry.
"""

from __future__ import annotations

from typing import Any


class FindExprError(Exception):
    """Base class for all search-string compilation errors."""

    error_type = "findexpr_error"

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint

    def details(self) -> dict[str, Any]:
        """Structured context for machine-readable error output."""
        return {}

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


class FieldConflictError(FindExprError):
    """
    A field received a constraint it cannot merge with.

    Raised for a second equality on the same field, or when an equality and a
    comparison target the same field (in either order).
    """

    error_type = "field_conflict"

    def __init__(self, field: str, *, existing: str, incoming: str) -> None:
        super().__init__(
            f"Conflicting constraints for field '{field}': "
            f"cannot apply {incoming} on top of {existing}",
            hint="Use a single equality per field, or only comparison operators.",
        )
        self.field = field
        self.existing = existing
        self.incoming = incoming

    def details(self) -> dict[str, Any]:
        return {"field": self.field, "existing": self.existing, "incoming": self.incoming}


class ValueCoercionError(FindExprError):
    """A value looked numeric or boolean but could not be converted."""

    error_type = "value_coercion"

    def __init__(self, raw_value: str, *, kind: str, field: str | None = None) -> None:
        where = f" for field '{field}'" if field else ""
        super().__init__(
            f"Value {raw_value!r}{where} was classified as {kind} but is not a valid {kind}",
            hint="Set FINDEXPR_MATCHING=anchored to treat partial matches as strings.",
        )
        self.raw_value = raw_value
        self.kind = kind
        self.field = field

    def details(self) -> dict[str, Any]:
        return {"rawValue": self.raw_value, "kind": self.kind, "field": self.field}


class UnparsedTermError(FindExprError):
    """A term has no recognized operator (only raised in strict mode)."""

    error_type = "unparsed_term"

    def __init__(self, term: str) -> None:
        super().__init__(
            f"Term {term!r} has no recognized operator",
            hint="Write terms as field:value, field!:value, or field>=value "
            "with no spaces around the operator.",
        )
        self.term = term

    def details(self) -> dict[str, Any]:
        return {"term": self.term}


class ConfigurationError(FindExprError):
    """An environment setting has an unsupported value."""

    error_type = "configuration_error"

    def __init__(self, name: str, value: str, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid value {value!r} for {name}. Allowed: {', '.join(allowed)}",
        )
        self.name = name
        self.value = value
        self.allowed = allowed

    def details(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value, "allowed": self.allowed}
