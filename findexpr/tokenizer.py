"""
Search-string tokenizer.

Splits a query on spaces while keeping quoted phrases in one piece:

    >>> split_terms('title:"The Great Gatsby" pages<250')
    ['title:"The Great Gatsby"', 'pages<250']

Quote characters are left in place; the value coercer trims them later.
"""

from __future__ import annotations

from dataclasses import dataclass

# Stands in for spaces inside a closed quoted span while the query is split.
PLACEHOLDER = "\x1f"


@dataclass(frozen=True)
class QuotedSpan:
    """A closed quoted span and the word it belongs to."""

    word_index: int
    original: str
    replaced: str


def _protect_quoted_spans(query: str) -> tuple[str, list[QuotedSpan]]:
    """
    Replace spaces inside closed quoted spans with PLACEHOLDER.

    Returns the substituted text (same length as the input) and the spans needed
    to restore it. An unterminated quote is never recorded, so the text after it
    is split like any other text.
    """
    chars = list(query)
    spans: list[QuotedSpan] = []
    in_quotes = False
    start = -1
    word_index = 0

    for i, ch in enumerate(query):
        if ch == '"':
            if in_quotes:
                in_quotes = False
                original = query[start : i + 1]
                replaced = original.replace(" ", PLACEHOLDER)
                chars[start : i + 1] = replaced
                spans.append(QuotedSpan(word_index, original, replaced))
            else:
                in_quotes = True
                start = i
        elif ch == " " and not in_quotes:
            word_index += 1

    return "".join(chars), spans


def split_terms(query: str) -> list[str]:
    """Split a raw query into term tokens, preserving quoted phrases."""
    if not query:
        return []

    substituted, spans = _protect_quoted_spans(query)
    words = substituted.split(" ")

    for span in spans:
        word = words[span.word_index]
        if span.replaced in word:
            words[span.word_index] = word.replace(span.replaced, span.original, 1)

    # Repeated spaces produce empty words; they carry no term.
    return [word for word in words if word]
