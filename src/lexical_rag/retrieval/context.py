"""Formatting of retrieved entries into a numbered context block."""

from __future__ import annotations

from collections.abc import Sequence

from lexical_rag.config import NO_CONTEXT_PLACEHOLDER
from lexical_rag.types import KnowledgeEntry, ScoredEntry


def format_context(
    entries: Sequence[KnowledgeEntry | ScoredEntry],
    *,
    placeholder: str = NO_CONTEXT_PLACEHOLDER,
) -> str:
    """Number entries from 1 in the order given, one per line.

    An empty sequence yields `placeholder` so the model is told explicitly that
    nothing relevant was found.
    """

    if not entries:
        return placeholder
    lines = []
    for i, item in enumerate(entries, start=1):
        entry = item.entry if isinstance(item, ScoredEntry) else item
        lines.append(f"{i}. {entry.text}\n")
    return "".join(lines)
