"""Compact JSON rendering of filter documents."""

from __future__ import annotations

import json
from dataclasses import dataclass

from .document import FilterDocument


@dataclass(frozen=True, slots=True)
class SerializerSettings:
    """JSON encoder settings. The defaults produce the compact wire format."""

    separators: tuple[str, str] = (",", ":")
    ensure_ascii: bool = False
    allow_nan: bool = False


def render(document: FilterDocument, settings: SerializerSettings | None = None) -> str:
    """
    Render a document as single-line JSON in field insertion order.

    Numbers are always floats, so `400` renders as `400.0`.
    """
    settings = settings or SerializerSettings()
    return json.dumps(
        document.to_dict(),
        separators=settings.separators,
        ensure_ascii=settings.ensure_ascii,
        allow_nan=settings.allow_nan,
    )
