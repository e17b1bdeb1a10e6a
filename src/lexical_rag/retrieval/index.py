"""Write-once knowledge index and its process-wide publication point."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from threading import Lock
from types import MappingProxyType

from loguru import logger

from lexical_rag.ingest.vectorizer import TermFrequencyVectorizer, Vectorizer
from lexical_rag.types import KnowledgeEntry


class KnowledgeIndex:
    """Ordered, read-only collection of indexed documents.

    Entry order matches the input document order; an entry's 1-based position
    is its citation number. There is no insert or delete: a changed corpus
    means building a new index.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[KnowledgeEntry] = ()) -> None:
        self._entries: tuple[KnowledgeEntry, ...] = tuple(entries)

    @property
    def entries(self) -> tuple[KnowledgeEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self._entries)

    def __getitem__(self, position: int) -> KnowledgeEntry:
        return self._entries[position]

    def texts(self) -> list[str]:
        return [entry.text for entry in self._entries]


def build_index(
    documents: Sequence[str],
    *,
    vectorizer: Vectorizer | None = None,
) -> KnowledgeIndex:
    """Vectorize every document and freeze the result.

    Never fails on content: empty or punctuation-only documents get an empty
    vector and can never be retrieved.
    """

    vectorizer = vectorizer or TermFrequencyVectorizer()
    vectors = vectorizer.vectorize_documents(documents)
    return KnowledgeIndex(
        [
            KnowledgeEntry(text=text, vector=MappingProxyType(vector))
            for text, vector in zip(documents, vectors, strict=True)
        ]
    )


class IndexHolder:
    """Holds the currently published index snapshot.

    `publish` builds the replacement completely before swapping the reference,
    so readers calling `current()` always see either the old or the new index,
    never a partially built one.
    """

    def __init__(
        self,
        documents: Sequence[str] = (),
        *,
        vectorizer: Vectorizer | None = None,
    ) -> None:
        self._vectorizer = vectorizer or TermFrequencyVectorizer()
        self._publish_lock = Lock()
        self._index = build_index(documents, vectorizer=self._vectorizer)
        self._generation = 1

    @property
    def vectorizer(self) -> Vectorizer:
        return self._vectorizer

    @property
    def generation(self) -> int:
        return self._generation

    def current(self) -> KnowledgeIndex:
        return self._index

    def publish(self, documents: Sequence[str]) -> tuple[KnowledgeIndex, int]:
        """Build an index from `documents`, swap it in and return it with its generation."""
        index = build_index(documents, vectorizer=self._vectorizer)
        with self._publish_lock:
            self._index = index
            self._generation += 1
            generation = self._generation
        logger.info(f"Published knowledge index generation={generation} entries={len(index)}")
        return index, generation
