"""Shared domain models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

TermVector = Mapping[str, float]


class Route(str, Enum):
    """Closed set of processing branches a query can be dispatched to."""

    RETRIEVAL = "retrieval"
    DIRECT = "direct"


@dataclass(frozen=True, slots=True)
class KnowledgeEntry:
    """An indexed document: its text and relative term-frequency vector."""

    text: str
    vector: TermVector


@dataclass(frozen=True, slots=True)
class ScoredEntry:
    """A retrieval result with its similarity score.

    `rank` is the 1-based position in the result list; `position` is the
    1-based position of the entry in the knowledge index.
    """

    entry: KnowledgeEntry
    score: float
    rank: int
    position: int
