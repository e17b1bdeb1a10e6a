"""Lexical RAG package."""

from .config import PipelineConfig, RetrievalConfig, RouterConfig
from .ingest.tokenizer import tokenize
from .ingest.vectorizer import vectorize
from .retrieval.context import format_context
from .retrieval.index import IndexHolder, KnowledgeIndex, build_index
from .retrieval.retriever import retrieve
from .retrieval.similarity import cosine
from .types import KnowledgeEntry, Route, ScoredEntry

__all__ = [
    "IndexHolder",
    "KnowledgeEntry",
    "KnowledgeIndex",
    "PipelineConfig",
    "RetrievalConfig",
    "Route",
    "RouterConfig",
    "ScoredEntry",
    "build_index",
    "cosine",
    "format_context",
    "retrieve",
    "tokenize",
    "vectorize",
]
