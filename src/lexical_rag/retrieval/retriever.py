"""Top-K lexical retriever with a strictly-positive relevance cutoff."""

from __future__ import annotations

from loguru import logger

from lexical_rag.config import RetrievalConfig
from lexical_rag.ingest.vectorizer import TermFrequencyVectorizer, Vectorizer
from lexical_rag.retrieval.index import IndexHolder, KnowledgeIndex
from lexical_rag.retrieval.similarity import cosine
from lexical_rag.types import KnowledgeEntry, ScoredEntry


def rank_entries(
    index: KnowledgeIndex,
    query: str,
    k: int,
    *,
    vectorizer: Vectorizer | None = None,
) -> list[ScoredEntry]:
    """Score every entry against the query and keep the relevant top `k`.

    Ranking steps:
    1. Vectorize the query and score each entry by cosine similarity.
    2. Sort by score, descending. `sorted` is stable, so equal scores keep
       their index order.
    3. Truncate to `k`; a `k` beyond the index size keeps everything and a
       non-positive `k` keeps nothing.
    4. Stop at the first score `<= 0`. A query that shares no token with any
       document therefore returns nothing rather than arbitrary context.
    """

    if k <= 0 or len(index) == 0:
        return []

    vectorizer = vectorizer or TermFrequencyVectorizer()
    query_vector = vectorizer.vectorize_query(query)
    scored = [
        (position, entry, cosine(query_vector, entry.vector))
        for position, entry in enumerate(index, start=1)
    ]
    ranked = sorted(scored, key=lambda item: item[2], reverse=True)

    results: list[ScoredEntry] = []
    for position, entry, score in ranked[:k]:
        if score <= 0:
            break
        results.append(
            ScoredEntry(entry=entry, score=score, rank=len(results) + 1, position=position)
        )
    return results


def retrieve(index: KnowledgeIndex, query: str, k: int) -> list[KnowledgeEntry]:
    """Return up to `k` entries relevant to `query`, best first."""
    return [item.entry for item in rank_entries(index, query, k)]


class LexicalRetriever:
    """Retrieves from whichever index snapshot is currently published."""

    def __init__(
        self,
        index_holder: IndexHolder,
        config: RetrievalConfig | None = None,
    ) -> None:
        self.index_holder = index_holder
        self.config = config or RetrievalConfig()

    def retrieve(self, query: str, *, top_k: int | None = None) -> list[ScoredEntry]:
        k = self.config.top_k if top_k is None else top_k
        if k < 0:
            raise ValueError(f"top_k must be >= 0, got {k}")

        index = self.index_holder.current()
        hits = rank_entries(index, query, k, vectorizer=self.index_holder.vectorizer)
        logger.debug(f"Retrieved {len(hits)}/{len(index)} entries for k={k}")
        return hits
