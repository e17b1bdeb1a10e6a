"""Exception hierarchy for the RAG service."""

from __future__ import annotations


class LexicalRagError(Exception):
    """Base class for errors raised outside the total retrieval core."""


class GenerationError(LexicalRagError):
    """The generation collaborator failed or returned unusable content."""
