"""Text helpers for tokenizing index records and rendering snippets."""

from __future__ import annotations

import re
from typing import Iterable, List

_TOKEN = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.]*[A-Za-z0-9_]|[A-Za-z0-9_]")


def tokenize(text: str) -> List[str]:
    """Lowercase word tokens.

    Dotted identifiers such as ``Package.function`` are kept whole and also
    split into their parts, so both the qualified and the bare name match.
    """
    tokens: List[str] = []
    for match in _TOKEN.finditer(text or ""):
        token = match.group(0).lower()
        tokens.append(token)
        if "." in token:
            tokens.extend(part for part in token.split(".") if part)
    return tokens


def make_snippet(text: str, terms: Iterable[str] = (), *, max_chars: int = 180) -> str:
    """Single-line excerpt of ``text`` centred on the first matching term."""
    flat = " ".join(text.split())
    if len(flat) <= max_chars:
        return flat

    lowered = flat.lower()
    positions = [lowered.find(term) for term in terms if term]
    hits = [position for position in positions if position >= 0]
    start = 0
    if hits:
        start = max(min(hits) - max_chars // 4, 0)
    end = min(start + max_chars, len(flat))
    start = max(end - max_chars, 0)

    snippet = flat[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(flat):
        snippet = snippet + "..."
    return snippet
