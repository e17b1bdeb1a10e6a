from lexical_rag.config import NO_CONTEXT_PLACEHOLDER
from lexical_rag.retrieval.context import format_context
from lexical_rag.types import KnowledgeEntry, ScoredEntry


def test_format_context_numbers_entries_in_given_order() -> None:
    entries = [KnowledgeEntry(text="A", vector={}), KnowledgeEntry(text="B", vector={})]

    assert format_context(entries) == "1. A\n2. B\n"


def test_format_context_empty_uses_placeholder() -> None:
    assert format_context([]) == NO_CONTEXT_PLACEHOLDER
    assert format_context([], placeholder="no relevant knowledge found") == "no relevant knowledge found"


def test_format_context_accepts_scored_entries_in_rank_order() -> None:
    hits = [
        ScoredEntry(entry=KnowledgeEntry(text="third doc", vector={}), score=0.9, rank=1, position=3),
        ScoredEntry(entry=KnowledgeEntry(text="first doc", vector={}), score=0.4, rank=2, position=1),
    ]

    assert format_context(hits) == "1. third doc\n2. first doc\n"
