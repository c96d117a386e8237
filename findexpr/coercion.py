"""Value coercion: infer number, boolean, or string from a raw term value."""

from __future__ import annotations

import math
import re

from .exceptions import ValueCoercionError
from .policies import MatchMode

CoercedValue = float | bool | str

_NUMBER_RE = re.compile(r"-?\d+(\.\d+)?")
_BOOLEAN_RE = re.compile(r"true|false")
# Number text accepted for conversion: decimal or exponent form, no "_" separators.
_FLOAT_TEXT_RE = re.compile(r"\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?\s*")


def _matches(pattern: re.Pattern[str], raw: str, matching: MatchMode) -> bool:
    if matching is MatchMode.ANCHORED:
        return pattern.fullmatch(raw) is not None
    return pattern.search(raw) is not None


def _to_number(raw: str, field: str | None) -> float:
    if _FLOAT_TEXT_RE.fullmatch(raw) is None:
        raise ValueCoercionError(raw, kind="number", field=field)
    value = float(raw)
    if not math.isfinite(value):
        raise ValueCoercionError(raw, kind="number", field=field)
    return value


def _to_boolean(raw: str, field: str | None) -> bool:
    text = raw.strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    raise ValueCoercionError(raw, kind="boolean", field=field)


def trim_quotes(raw: str) -> str:
    """Strip one leading and one trailing double quote when both are present."""
    if len(raw) >= 2 and raw.startswith('"') and raw.endswith('"'):
        return raw[1:-1]
    return raw


def coerce_value(
    raw: str,
    *,
    matching: MatchMode = MatchMode.UNANCHORED,
    field: str | None = None,
) -> CoercedValue:
    """
    Classify and convert a raw value.

    Numbers are checked first, then booleans, then the value falls back to a
    string. With unanchored matching a value only has to contain a number or a
    boolean literal to be classified as one; conversion still needs the whole
    value to be valid.

    Raises:
        ValueCoercionError: If the value is classified as a number or boolean
            but does not convert.
    """
    if _matches(_NUMBER_RE, raw, matching):
        return _to_number(raw, field)
    if _matches(_BOOLEAN_RE, raw, matching):
        return _to_boolean(raw, field)
    return trim_quotes(raw)
