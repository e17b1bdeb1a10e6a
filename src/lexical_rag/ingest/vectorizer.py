"""Term-frequency vectorization for documents and queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Sequence

from lexical_rag.ingest.tokenizer import tokenize


def vectorize(tokens: Sequence[str]) -> dict[str, float]:
    """Return the relative frequency of each distinct token.

    Values sum to 1.0 for non-empty input. An empty sequence yields an empty
    mapping.
    """

    if not tokens:
        return {}
    total = float(len(tokens))
    return {token: count / total for token, count in Counter(tokens).items()}


class Vectorizer(ABC):
    """Vectorizer interface used by index building and retrieval."""

    @abstractmethod
    def vectorize_documents(self, texts: Sequence[str]) -> list[dict[str, float]]:
        """Vectorize many documents."""

    @abstractmethod
    def vectorize_query(self, text: str) -> dict[str, float]:
        """Vectorize one query."""


class TermFrequencyVectorizer(Vectorizer):
    """Bag-of-words relative-frequency vectors with no IDF weighting."""

    def vectorize_documents(self, texts: Sequence[str]) -> list[dict[str, float]]:
        return [self._vectorize(text) for text in texts]

    def vectorize_query(self, text: str) -> dict[str, float]:
        return self._vectorize(text)

    @staticmethod
    def _vectorize(text: str) -> dict[str, float]:
        return vectorize(tokenize(text))
